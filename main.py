"""
Grove - Growing Bézier Tree

Opens an interactive window by default:

    1 / 2   switch between Bézier demo and tree
    r       restart
    s       save a screenshot
    z       zoom toward the fully grown tree

With --save the scene is rendered headless for --frames frames and the
last frame is written to the given PNG.
"""

import argparse

from grove.app import GroveApp, print_summary, save_frame
from grove.config import PRESETS, get_preset
from grove.scene import Scene


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Grow a fractal Bézier tree.")
    parser.add_argument("--preset", choices=sorted(PRESETS), default="default")
    parser.add_argument("--width", type=int, default=960)
    parser.add_argument("--height", type=int, default=720)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--frames", type=int, default=600,
                        help="Frames to simulate before saving (headless only)")
    parser.add_argument("--save", metavar="PATH", default=None,
                        help="Render headless and save the last frame to PATH")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = get_preset(args.preset)

    if args.save:
        print("\n" + "=" * 60)
        print(f"  GROVE: rendering {args.frames} frames ({args.preset} preset)")
        print("=" * 60)
        scene = Scene(config, args.width, args.height, seed=args.seed)
        stats = save_frame(args.save, scene, num_frames=args.frames)
        print_summary(stats)
        return

    app = GroveApp(config, args.width, args.height, seed=args.seed)
    app.run()


if __name__ == "__main__":
    main()
