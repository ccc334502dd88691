"""CLI for blurring an image file horizontally."""

import argparse
import logging
import sys
import time
from pathlib import Path

from PIL import UnidentifiedImageError

from dirblur import FilterConfig
from dirblur.codecs import RasterCodec, load_image, save_image


def _parse_kernel(text: str):
    try:
        return tuple(float(w) for w in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid kernel: {text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Blur an image along the horizontal axis")
    parser.add_argument("input", type=Path, help="Input image (or .npy raster)")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output image (or .npy raster)")
    parser.add_argument("-c", "--config", type=Path, help="Path to YAML filter configuration")
    parser.add_argument("-k", "--kernel", type=_parse_kernel, help="Comma-separated odd-length weights")
    parser.add_argument("-m", "--method", type=str, choices=["direct", "numpy", "ndimage"], help="Filter method")
    parser.add_argument("-w", "--workers", type=int, help="Number of parallel workers")
    parser.add_argument("--no-progress", action="store_true", help="Disable progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    try:
        cfg = FilterConfig.from_yaml(args.config) if args.config else FilterConfig(progress=True)
        if args.kernel is not None:
            cfg.weights = args.kernel
        if args.method is not None:
            cfg.method = args.method
        if args.workers is not None:
            cfg.num_workers = args.workers
        if args.no_progress:
            cfg.progress = False
        blur_filter = cfg.build_filter()
    except (OSError, ValueError) as e:
        print(f"Invalid configuration: {e}")
        return 1

    if not args.input.is_file():
        print(f"Not a file: {args.input}")
        return 1

    try:
        if args.input.suffix.lower() == ".npy":
            source, meta = RasterCodec.load(args.input)
        else:
            source, meta = load_image(args.input, cfg.row_alignment), {}
    except (UnidentifiedImageError, ValueError, KeyError) as e:
        print(f"Not an image: {args.input} ({e})")
        return 1
    except OSError as e:
        print(f"Cannot read {args.input}: {e}")
        return 1

    start = time.perf_counter()
    blurred = blur_filter.apply(source, **cfg.apply_kwargs())
    elapsed = time.perf_counter() - start

    if args.output.suffix.lower() == ".npy":
        RasterCodec.save(args.output, blurred, meta={**meta, "weights": list(cfg.weights)})
    else:
        save_image(args.output, blurred)

    print(f"Blurred {source.width}x{source.height} {source.layout.name} image "
          f"with {len(cfg.weights)}-tap kernel in {elapsed:.2f}s -> {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
