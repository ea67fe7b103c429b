import argparse
import sys

import matplotlib.pyplot as plt
from loguru import logger

from raycaster.common import Settings, default_scene
from raycaster.cpu_rt import CpuApp
from raycaster.jit_rt import JitApp
from raycaster.viewer import MatplotlibSurface, run_interactive


def parse_args(argv=None):
    parser = argparse.ArgumentParser()
    backend = parser.add_mutually_exclusive_group()
    backend.add_argument("--cpu", action="store_true", help="Use the pure Python renderer")
    backend.add_argument("--jit", action="store_true", help="Use the numba renderer (default)")

    parser.add_argument("--width", type=int, default=640, help="Image width")
    parser.add_argument("--height", type=int, default=640, help="Image height")
    parser.add_argument("--yaw", type=float, default=0.0, help="Camera yaw in degrees")
    parser.add_argument("--pitch", type=float, default=0.0, help="Camera pitch in degrees")
    parser.add_argument("--roll", type=float, default=0.0, help="Camera roll in degrees")
    parser.add_argument("--position", type=float, nargs=3, default=[0.0, 0.0, 0.0],
                        metavar=("X", "Y", "Z"), help="Camera position")
    parser.add_argument("--clip-shadows", action="store_true",
                        help="Objects behind a point light do not shadow it")

    parser.add_argument("--output", help="Save the image to this file and exit")
    parser.add_argument("--interactive", action="store_true", help="Open a window with camera controls")
    parser.add_argument("--verbose", action="store_true")

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    settings = Settings(
        width=args.width,
        height=args.height,
        camera_position=tuple(args.position),
        clip_point_shadows=args.clip_shadows,
    )

    surface = None
    if args.interactive:
        surface = MatplotlibSurface()

    app_cls = CpuApp if args.cpu else JitApp
    app = app_cls(settings, scene=default_scene(), surface=surface)
    app.camera.set_orientation(args.yaw, args.pitch, args.roll)

    if args.interactive:
        run_interactive(app, surface)
        return

    image = app.render()

    if args.output:
        plt.imsave(args.output, image)
        logger.info(f"Saved image to {args.output}")
    else:
        plt.imshow(image)
        plt.show(block=True)


if __name__ == "__main__":
    main()
