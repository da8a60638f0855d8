# main.py
import argparse
import logging
import random
import sys
import time

import numpy as np

from renderer.output import save_image
from renderer.raytracer import MAX_BOUNCES, Renderer, RenderError
from renderer.tone_mapping import to_rgb8, tone_map_image
from scenes import SCENES

QUALITY_LEVELS = {
    "preview": {"samples": 4, "bounces": 8},
    "balanced": {"samples": 50, "bounces": 20},
    "final": {"samples": 500, "bounces": MAX_BOUNCES},
}


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a sphere scene with a Monte-Carlo path tracer.")
    parser.add_argument("output", help="Output image path (.ppm writes P3 text, other extensions use Pillow)")
    parser.add_argument("--scene", choices=sorted(SCENES), default="random",
                        help="Scene to render (default: random)")
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels (default: 400)")
    parser.add_argument("--aspect-ratio", type=float, default=3.0 / 2.0,
                        help="Width / height (default: 1.5)")
    parser.add_argument("--quality", choices=list(QUALITY_LEVELS), default="balanced",
                        help="Sample and bounce preset (default: balanced)")
    parser.add_argument("--samples", type=int, default=None, help="Samples per pixel, overrides --quality")
    parser.add_argument("--max-depth", type=int, default=None, help="Maximum bounces, overrides --quality")
    parser.add_argument("--workers", type=int, default=None, help="Worker threads (default: CPU count)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible renders")
    parser.add_argument("--chunk-size", type=int, default=None,
                        help="Pixels per worker task (default: one scanline)")
    parser.add_argument("--preview", action="store_true", help="Show pixels in a window while rendering")
    parser.add_argument("--scale", type=int, default=2, help="Preview window scale factor (default: 2)")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


class Application:
    def __init__(self, args: argparse.Namespace):
        self.args = args
        self.render_width = args.width
        self.render_height = max(1, int(args.width / args.aspect_ratio))

        quality = QUALITY_LEVELS[args.quality]
        self.samples = args.samples if args.samples is not None else quality["samples"]
        self.max_depth = args.max_depth if args.max_depth is not None else quality["bounces"]

        # Scene layout has its own generator so --seed fixes the scene as well
        scene_rng = random.Random(args.seed)
        self.world, self.camera = SCENES[args.scene](scene_rng, aspect_ratio=args.aspect_ratio)

        self.renderer = Renderer(
            self.render_width,
            self.render_height,
            N=self.samples,
            max_depth=self.max_depth,
            workers=args.workers,
            seed=args.seed,
            chunk_size=args.chunk_size
        )

    def log(self, message: str, **kwargs) -> None:
        if not self.args.quiet:
            print(message, **kwargs)

    def progress(self, completed: int, total: int) -> None:
        rows_left = (total - completed) // self.render_width
        self.log(f"\rScanlines remaining: {rows_left}  ", end="", file=sys.stderr, flush=True)

    def run(self) -> None:
        self.log(f"Rendering '{self.args.scene}' at {self.render_width}x{self.render_height}, "
                 f"{self.samples} samples/pixel, max depth {self.max_depth}, "
                 f"{self.renderer.workers} workers")
        start = time.time()
        if self.args.preview:
            image = self.run_preview()
        else:
            image = tone_map_image(self.renderer.render(self.camera, self.world, callback=self.progress))
            self.log("", file=sys.stderr)
        self.log(f"Rendering time: {time.time() - start:.2f} seconds")

        save_image(self.args.output, image)
        self.log(f"Saved to: {self.args.output}")

    def run_preview(self):
        """Streams pixels into a window; closing it early aborts the render."""
        from renderer.display import LiveDisplay

        display = LiveDisplay(self.render_width, self.render_height, scale=self.args.scale)
        image = np.zeros((self.render_height, self.render_width, 3), dtype=np.uint8)
        chunks = self.renderer.iter_chunks(self.camera, self.world)
        try:
            for chunk in chunks:
                for index, color in chunk:
                    rgb = to_rgb8(color)
                    row, col = divmod(index, self.render_width)
                    image[row, col] = rgb
                    display.draw_pixel(index, rgb)
                display.present()
                if not display.pump():
                    raise RenderError(f"preview closed before the render finished, {self.args.output} not written")
            # Redraw from the finished buffer before waiting on the window
            display.draw_image(image)
            display.present()
            display.wait_until_closed()
            return image
        finally:
            chunks.close()
            display.close()


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    try:
        Application(args).run()
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
