"""
Renderer module - the heart of the ray tracer.

Implements:
- Recursive radiance accumulation with a depth cutoff
- Multi-sample anti-aliasing
- Multi-threaded tile-based rendering with per-tile random streams
"""

from __future__ import annotations
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

from .camera import Camera, CameraDescriptor
from .color import Color
from .image import Image
from .interval import Interval
from .materials import scatter
from .ray import Ray
from .scene import Scene

logger = logging.getLogger(__name__)

# Lower bound skips hits at the ray's own origin (shadow acne)
HIT_INTERVAL = Interval(0.001, float('inf'))

Tile = Tuple[int, int, int, int]


@dataclass(frozen=True)
class RenderOptions:
    """Output size and sampling configuration."""
    image_width: int = 400
    aspect_ratio: float = 16.0 / 9.0
    samples_per_pixel: int = 10
    max_ray_depth: int = 10

    @property
    def image_height(self) -> int:
        return max(1, int(self.image_width / self.aspect_ratio))


class Renderer:
    """Stochastic ray tracer with optional multi-threading."""

    def __init__(
        self,
        background_start: Optional[Color] = None,
        background_end: Optional[Color] = None,
        num_threads: int = 1,
        tile_size: int = 32
    ):
        """Create a renderer.

        Args:
            background_start: Sky color straight up
            background_end: Sky color straight down
            num_threads: Worker threads for the tile loop (1 = render inline)
            tile_size: Edge length of a square render tile in pixels
        """
        self.background_start = background_start if background_start is not None else Color(0.3, 0.6, 0.9)
        self.background_end = background_end if background_end is not None else Color(1.0, 1.0, 1.0)
        self.num_threads = max(1, num_threads)
        self.tile_size = max(1, tile_size)
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render_image(
        self,
        descriptor: CameraDescriptor,
        scene: Scene,
        options: RenderOptions,
        seed: Optional[int] = None
    ) -> Image:
        """Render the scene and return the RGBA image buffer.

        Args:
            descriptor: Camera pose and lens configuration
            scene: The objects to render and their materials
            options: Output size and sampling configuration
            seed: Seed for the random streams; a fixed seed gives the same
                image regardless of the thread count

        Returns:
            The finished image, owned by the caller
        """
        if options.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {options.samples_per_pixel}")

        width = options.image_width
        height = options.image_height
        # Viewport state is local to this call; a Renderer may be shared across threads
        camera = Camera()
        camera.reset_viewport(descriptor, width, height)

        logger.info("Rendering image\n  - size: %dx%d", width, height)
        start_time = time.perf_counter()

        image = Image(width, height)
        tiles = self._generate_tiles(width, height)
        streams = np.random.SeedSequence(seed).spawn(len(tiles))
        total_tiles = len(tiles)
        completed_tiles = [0]  # Use list for mutable in closure
        progress_lock = threading.Lock()

        def render_tile(job: Tuple[Tile, np.random.SeedSequence]) -> Tuple[Tile, np.ndarray]:
            tile, stream = job
            rng = np.random.default_rng(stream)
            block = self._render_tile(tile, camera, scene, options, rng)

            with progress_lock:
                completed_tiles[0] += 1
                if self._progress_callback:
                    self._progress_callback(completed_tiles[0] / total_tiles)
            return tile, block

        jobs = list(zip(tiles, streams))
        if self.num_threads > 1:
            with ThreadPoolExecutor(max_workers=self.num_threads) as executor:
                results = list(executor.map(render_tile, jobs))
        else:
            results = [render_tile(job) for job in jobs]

        for (x0, y0, _, _), block in results:
            image.paste(x0, y0, block)

        logger.debug("Render finished in %.2fs", time.perf_counter() - start_time)
        return image

    def _render_tile(self, tile: Tile, camera: Camera, scene: Scene, options: RenderOptions,
                     rng: np.random.Generator) -> np.ndarray:
        """Render the pixels of one tile into an RGBA block."""
        x0, y0, x1, y1 = tile
        samples = options.samples_per_pixel
        pixel_samples_scale = 1.0 / samples
        block = np.zeros((y1 - y0, x1 - x0, Image.channels), dtype=np.uint8)

        for y in range(y0, y1):
            for x in range(x0, x1):
                pixel_color = Color(0, 0, 0)
                for _ in range(samples):
                    ray = camera.get_ray(x, y, rng)
                    pixel_color = pixel_color + self.calculate_color(ray, scene, options.max_ray_depth, rng)

                block[y - y0, x - x0] = (pixel_color * pixel_samples_scale).as_rgba()

        return block

    def calculate_color(self, ray: Ray, scene: Scene, depth: int, rng: np.random.Generator) -> Color:
        """Compute the color carried back along a ray.

        Args:
            ray: The ray to trace
            scene: The scene to trace against
            depth: Remaining bounces; at 0 the ray contributes no light
            rng: Random source for material scattering

        Returns:
            The computed color for this ray
        """
        if depth <= 0:
            return Color(0, 0, 0)

        hit_record = scene.find_nearest_hit(ray, HIT_INTERVAL)
        if hit_record is None:
            return self.background_color(ray)

        result = scatter(
            scene.material(hit_record.material), ray,
            hit_record.point, hit_record.normal, hit_record.front_face, rng
        )
        if result is None:
            return Color(0, 0, 0)
        return result.attenuation * self.calculate_color(result.scattered_ray, scene, depth - 1, rng)

    def background_color(self, ray: Ray) -> Color:
        """Vertical sky gradient for rays that miss every object."""
        unit_direction = ray.direction.unit()
        a = 0.5 * (unit_direction.y + 1.0)
        return self.background_end * (1.0 - a) + self.background_start * a

    def _generate_tiles(self, width: int, height: int) -> List[Tile]:
        """Generate tiles for parallel rendering.

        Args:
            width: Image width
            height: Image height

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples
        """
        tile_size = self.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles


def render_image(descriptor: CameraDescriptor, scene: Scene, options: RenderOptions,
                 seed: Optional[int] = None) -> Image:
    """Convenience function rendering with a default single-threaded Renderer."""
    return Renderer().render_image(descriptor, scene, options, seed=seed)
