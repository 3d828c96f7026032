"""
Elktracer - a stochastic ray tracer for scenes of spheres

Renders a still image by casting jittered rays through a thin-lens camera,
bouncing them off Lambert, Metal and Dielectric surfaces and averaging the
gamma-corrected result per pixel.
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3
from .color import Color
from .interval import Interval
from .ray import Ray
from .materials import Material, Lambert, Metal, Dielectric, ScatterResult, scatter
from .shapes import Sphere, HitRecord, Hittable
from .scene import Scene
from .camera import Camera, CameraDescriptor
from .image import Image
from .renderer import Renderer, RenderOptions, render_image
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene, dump_scene, save_scene

__all__ = [
    'Vec3', 'Point3', 'Color', 'Interval', 'Ray',
    'Material', 'Lambert', 'Metal', 'Dielectric', 'ScatterResult', 'scatter',
    'Sphere', 'HitRecord', 'Hittable', 'Scene',
    'Camera', 'CameraDescriptor', 'Image',
    'Renderer', 'RenderOptions', 'render_image',
    'SceneParser', 'SceneParseError', 'load_scene', 'parse_scene', 'dump_scene', 'save_scene',
]
