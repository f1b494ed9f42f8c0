"""CLI for the shrink backend."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click

from .app import create_app
from .config import Config


@click.command()
@click.option("-h", "--host", default=None, help="Bind host (default $SHRINK_HOST or 0.0.0.0)")
@click.option("-p", "--port", default=None, type=int, help="Bind port (default $SHRINK_PORT or 8888)")
@click.option("--upload-dir", default=None, type=click.Path(file_okay=False, path_type=Path),
              help="Content root for stored derivatives")
@click.option("--public-url", default=None, help="Public base URL used in responses")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def cli(host: str | None, port: int | None, upload_dir: Path | None,
        public_url: str | None, verbose: bool) -> None:
    """Run the image upload and compression server."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    base = Config.load()
    config = Config(
        host=host if host is not None else base.host,
        port=port if port is not None else base.port,
        upload_dir=upload_dir if upload_dir is not None else base.upload_dir,
        public_url=public_url if public_url is not None else base.public_url,
        max_upload_size=base.max_upload_size,
        target_size=base.target_size,
    )

    app = create_app(config)
    logging.info("Listening on %s:%d (pid %d)", config.host, config.port, os.getpid())
    try:
        app.run(host=config.host, port=config.port, use_reloader=False)
    except KeyboardInterrupt:
        logging.info("Interrupted")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
