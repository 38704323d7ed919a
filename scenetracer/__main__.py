"""
Command line renderer for the demo room.

    python -m scenetracer out.png --width 300 --height 250 --reflective floor
"""

import argparse
import logging
import sys
from typing import List, Optional

from .logging_config import setup_logging
from .render import render
from .image import save_image
from .scene import Light
from .scenes import SECOND_LIGHT_INTENSITY, SECOND_LIGHT_POSITION, demo_camera, demo_room
from .tracer import BlendPolicy, TracerSettings
from . import config

logger = logging.getLogger("scenetracer")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scenetracer", description="Render the demo room with a recursive ray tracer"
    )
    parser.add_argument("output", help="Output image path (format from suffix, e.g. .png)")
    parser.add_argument("--width", type=int, default=300, help="Image width")
    parser.add_argument("--height", type=int, default=250, help="Image height")
    parser.add_argument("--depth", type=int, default=config.MAX_DEPTH,
                        help="Maximum recursion depth")
    parser.add_argument("--blend", choices=[p.value for p in BlendPolicy],
                        default=config.BLEND_POLICY, help="Secondary ray blend policy")
    parser.add_argument("--workers", type=int, default=None,
                        help="Worker processes (default: render in this process)")
    parser.add_argument("--reflective", nargs="*", default=[], metavar="NAME",
                        help="Primitives to make reflective")
    parser.add_argument("--transparent", nargs="*", default=[], metavar="NAME",
                        help="Primitives to make transparent")
    parser.add_argument("--second-light", nargs="*", type=float, metavar="COORD",
                        help="Add the second light, optionally at X Y Z")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.second_light is not None and len(args.second_light) not in (0, 3):
        parser.error("--second-light takes no coordinates or exactly X Y Z")
    setup_logging("scenetracer", args.log_level)

    scene = demo_room()
    try:
        for name in args.reflective:
            scene.find(name).material.reflective = True
        for name in args.transparent:
            scene.find(name).material.transparent = True
    except KeyError as exc:
        names = ", ".join(p.name for p in scene.primitives)
        logger.error("Unknown primitive %s (known: %s)", exc, names)
        return 2

    if args.second_light is not None:
        position = args.second_light or SECOND_LIGHT_POSITION
        scene.add_light(Light(position, SECOND_LIGHT_INTENSITY))

    def report(rows_done: int, height: int) -> None:
        if rows_done % 10 == 0 or rows_done == height:
            logger.info("%d%%", rows_done * 100 // height)

    settings = TracerSettings(max_depth=args.depth, blend_policy=args.blend)
    grid = render(
        scene, demo_camera(), args.width, args.height,
        settings=settings, workers=args.workers, progress=report,
    )
    save_image(grid, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
