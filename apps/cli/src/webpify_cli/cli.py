"""CLI for a single URL -> WebP conversion."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from webpify_converter import ImageConverter, new_session
from webpify_shared.protocol import DEFAULT_RESIZE_RATIO, ProtocolError, parse_resize_ratio

DEFAULT_IMAGE_URL = (
    "https://svs.gsfc.nasa.gov/vis/a030000/a030800/a030877/frames/"
    "5760x3240_16x9_01p/BlackMarble_2016_928m_russia_west_labeled.png"
)


@click.command()
@click.option("-u", "--url", default=DEFAULT_IMAGE_URL, envvar="WEBPIFY_IMAGE_URL",
              show_default=True, help="Source image URL")
@click.option("-r", "--ratio", default=str(DEFAULT_RESIZE_RATIO), envvar="WEBPIFY_RESIZE_RATIO",
              show_default=True, help="Resize ratio applied to width and height")
@click.option("-o", "--output-dir", default="output", envvar="WEBPIFY_OUTPUT_DIR",
              type=click.Path(file_okay=False, path_type=Path),
              show_default=True, help="Directory for output-image-<N>.webp files")
@click.option("--timeout", default=30.0, type=float, envvar="WEBPIFY_FETCH_TIMEOUT",
              show_default=True, help="Fetch timeout in seconds")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def cli(url: str, ratio: str, output_dir: Path, timeout: float, verbose: bool) -> None:
    """Fetch one image and convert it to WebP."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        resize_ratio = parse_resize_ratio(ratio)
    except ProtocolError as e:
        raise click.BadParameter(str(e), param_hint="--ratio") from e

    converter = ImageConverter(output_dir, session=new_session(), fetch_timeout=timeout)
    converter.ensure_output_dir()

    result = converter.convert(url, resize_ratio)
    if not result.success:
        logging.error("Error converting image: %s", result.error_message)
        sys.exit(1)

    click.echo(result.output_path)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
