"""
Command-line interface for rendering scene files.
"""

import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

from . import __version__, log
from .renderer import Renderer, RenderOptions
from .scene_parser import SceneParseError, load_scene

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='elktracer',
        description='Elktracer - a stochastic sphere ray tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py render -f scenes/example.json -w 400 -a 1.7778 -s 10 -r 10
  python main.py render -f scene.yaml -o hd.png -w 1920 -a 1.7778 -s 100 -r 50 --threads 8
        '''
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command', required=True)

    render = subparsers.add_parser('render', help='Renders a scene')
    render.add_argument('-f', '--scene-file', type=Path, required=True, metavar='FILE',
                        help='Scene description (JSON or YAML)')
    render.add_argument('-o', '--output-file', type=Path, default=Path('out.png'), metavar='FILE',
                        help='Output image (default: out.png)')
    render.add_argument('-w', '--image-width', type=_positive_int, required=True, metavar='WIDTH')
    render.add_argument('-a', '--aspect-ratio', type=_positive_float, required=True, metavar='ASPECT_RATIO')
    render.add_argument('-s', '--samples-per-pixel', type=_positive_int, required=True, metavar='SAMPLES')
    render.add_argument('-r', '--max-ray-depth', type=_positive_int, required=True, metavar='DEPTH')
    render.add_argument('--threads', type=int, default=0, help='Number of threads (0=auto)')
    render.add_argument('--seed', type=int, default=None, help='Random seed for a reproducible image')
    return parser


def _progress_bar(bar_len: int = 40):
    last_progress = [-1]

    def callback(progress: float) -> None:
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    return callback


def render_command(args: argparse.Namespace) -> int:
    if not args.scene_file.exists():
        logger.error("Scene file does not exist: %s", args.scene_file)
        return 1

    try:
        camera, scene = load_scene(args.scene_file)
    except SceneParseError as e:
        logger.error("%s", e)
        return 1
    logger.debug("Parsed scene: %s, %d objects", camera, len(scene))

    options = RenderOptions(
        image_width=args.image_width,
        aspect_ratio=args.aspect_ratio,
        samples_per_pixel=args.samples_per_pixel,
        max_ray_depth=args.max_ray_depth
    )
    num_threads = args.threads if args.threads > 0 else (os.cpu_count() or 4)
    renderer = Renderer(num_threads=num_threads)
    renderer.set_progress_callback(_progress_bar())

    start_time = time.time()
    image = renderer.render_image(camera, scene, options, seed=args.seed)
    elapsed = time.time() - start_time
    print()
    logger.info("Render completed in %.2f seconds", elapsed)

    args.output_file.parent.mkdir(parents=True, exist_ok=True)
    image.save(args.output_file)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    log.initialize()
    args = build_parser().parse_args(argv)

    if args.command == 'render':
        return render_command(args)
    return 1


if __name__ == '__main__':
    sys.exit(main())
