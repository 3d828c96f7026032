"""
Scene description parser.

Reads and writes the JSON (or YAML) scene format:
- Camera configuration
- Materials library, referenced by id
- Objects (spheres with a position, radius and material id)

Example scene file:
```json
{
  "camera": {
    "position": [12, 2, 3],
    "look-at": [0, 0, 0],
    "up": [0, 1, 0],
    "fov-vertical-degrees": 15,
    "defocus-angle": 0.6,
    "focus-distance": 10
  },
  "materials": [
    {"id": "ground", "material": {"type": "Lambert", "albedo": [0.8, 0.8, 0.0]}},
    {"id": "chrome", "material": {"type": "Metal", "albedo": [0.8, 0.6, 0.2], "fuzziness": 1.0}},
    {"id": "glass", "material": {"type": "Transparent", "refraction-index": 1.5}}
  ],
  "objects": [
    {"id": "floor", "position": [0, -100.5, -1], "material": "ground",
     "object": {"type": "Sphere", "radius": 100}}
  ]
}
```
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import yaml

from .camera import CameraDescriptor
from .color import Color
from .materials import Dielectric, Lambert, Material, Metal
from .scene import Scene
from .shapes import Sphere
from .vec3 import Vec3

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.scene = Scene()
        self.material_ids: Dict[str, int] = {}
        self.camera: Optional[CameraDescriptor] = None

    def parse_file(self, filepath: PathLike) -> Tuple[CameraDescriptor, Scene]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (JSON, or YAML for .yaml/.yml)

        Returns:
            Tuple of (camera, scene)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()
        try:
            if path.suffix in ('.yaml', '.yml'):
                data = yaml.safe_load(content)
            else:
                data = json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Unable to parse scene file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file {filepath} must contain a mapping at the top level")
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[CameraDescriptor, Scene]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (camera, scene)
        """
        # Parse materials first (objects reference them)
        if 'materials' in data:
            self._parse_materials(data['materials'])

        if 'objects' in data:
            self._parse_objects(data['objects'])

        if 'camera' in data:
            self._parse_camera(data['camera'])
        else:
            self.camera = CameraDescriptor()

        logger.debug(
            "Parsed scene: %d materials, %d objects", len(self.scene.materials), len(self.scene)
        )
        return self.camera, self.scene

    def _parse_float(self, value: Any, what: str) -> float:
        """Convert a scalar field, reporting bad values as SceneParseError."""
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid number for {what}: {value!r}") from e

    def _parse_components(self, data: Any, keys: str, what: str) -> Tuple[float, float, float]:
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"{what} must have 3 components, got {len(data)}")
            values = data
        elif isinstance(data, dict):
            values = [data.get(key, 0) for key in keys]
        else:
            raise SceneParseError(f"Cannot parse {what} from: {data}")
        x, y, z = (self._parse_float(value, what) for value in values)
        return x, y, z

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from a 3-element list or an x/y/z mapping."""
        return Vec3(*self._parse_components(data, 'xyz', 'Vec3'))

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from a 3-element list, an r/g/b mapping or a hex string."""
        if isinstance(data, str):
            if data.startswith('#') and len(data) == 7:
                try:
                    r = int(data[1:3], 16) / 255.0
                    g = int(data[3:5], 16) / 255.0
                    b = int(data[5:7], 16) / 255.0
                except ValueError as e:
                    raise SceneParseError(f"Cannot parse color from string: {data}") from e
                return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        return Color(*self._parse_components(data, 'rgb', 'Color'))

    def _require_mapping(self, data: Any, what: str) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise SceneParseError(f"{what} must be a mapping, got: {data!r}")
        return data

    def _parse_materials(self, materials_data: Union[List[Dict[str, Any]], Dict[str, Any]]) -> None:
        """Parse the materials section (a list of id'd entries or an id mapping)."""
        if isinstance(materials_data, dict):
            entries = [(name, mat_data) for name, mat_data in materials_data.items()]
        elif isinstance(materials_data, list):
            entries = []
            for entry in materials_data:
                entry = self._require_mapping(entry, "Material entry")
                if 'id' not in entry:
                    raise SceneParseError(f"Material entry without id: {entry}")
                entries.append((entry['id'], entry.get('material', entry)))
        else:
            raise SceneParseError(f"Materials must be a list or a mapping, got: {materials_data!r}")

        for name, mat_data in entries:
            if not isinstance(name, str):
                raise SceneParseError(f"Material id must be a string, got: {name!r}")
            if name in self.material_ids:
                raise SceneParseError(f"Duplicate material id: {name}")
            self.material_ids[name] = self.scene.add_material(self._parse_material(mat_data))

    def _parse_material(self, mat_data: Any) -> Material:
        mat_data = self._require_mapping(mat_data, "Material")
        mat_type = str(mat_data.get('type', 'lambert')).lower()

        if mat_type in ('lambert', 'lambertian'):
            albedo = self._parse_color(mat_data.get('albedo', [0.5, 0.5, 0.5]))
            return Lambert(albedo)

        elif mat_type == 'metal':
            albedo = self._parse_color(mat_data.get('albedo', [0.8, 0.8, 0.8]))
            fuzziness = self._parse_float(mat_data.get('fuzziness', 0.0), 'fuzziness')
            return Metal(albedo, fuzziness)

        elif mat_type in ('transparent', 'dielectric'):
            index = mat_data.get('refraction-index', mat_data.get('refraction_index', 1.5))
            return Dielectric(self._parse_float(index, 'refraction-index'))

        raise SceneParseError(f"Unknown material type: {mat_type}")

    def _get_material(self, mat_ref: Any) -> int:
        """Resolve a material id to its handle in the scene arena."""
        if not isinstance(mat_ref, str):
            raise SceneParseError(f"Invalid material reference: {mat_ref}")
        if mat_ref not in self.material_ids:
            raise SceneParseError(f"Material not found: {mat_ref}")
        return self.material_ids[mat_ref]

    def _parse_objects(self, objects_data: List[Dict[str, Any]]) -> None:
        """Parse the objects section."""
        if not isinstance(objects_data, list):
            raise SceneParseError(f"Objects must be a list, got: {objects_data!r}")

        for obj_data in objects_data:
            obj_data = self._require_mapping(obj_data, "Object entry")
            material = self._get_material(obj_data.get('material'))
            shape = self._require_mapping(obj_data.get('object', {'type': 'Sphere'}), "Object shape")
            obj_type = str(shape.get('type', 'sphere')).lower()

            if obj_type == 'sphere':
                center = self._parse_vec3(obj_data.get('position', [0, 0, 0]))
                radius = self._parse_float(shape.get('radius', 1.0), 'radius')
                self.scene.add(Sphere(center, radius, material))
            else:
                raise SceneParseError(f"Unknown object type: {obj_type}")

    def _parse_camera(self, camera_data: Any) -> None:
        """Parse the camera section; missing keys fall back to the default pose."""
        camera_data = self._require_mapping(camera_data, "Camera")
        default = CameraDescriptor()

        def get(key: str, fallback: Any) -> Any:
            return camera_data.get(key, camera_data.get(key.replace('-', '_'), fallback))

        def number(key: str, fallback: float) -> float:
            return self._parse_float(get(key, fallback), key)

        self.camera = CameraDescriptor(
            position=self._parse_vec3(get('position', list(default.position))),
            look_at=self._parse_vec3(get('look-at', list(default.look_at))),
            up=self._parse_vec3(get('up', list(default.up))),
            fov_vertical_degrees=number('fov-vertical-degrees', default.fov_vertical_degrees),
            defocus_angle=number('defocus-angle', default.defocus_angle),
            focus_distance=number('focus-distance', default.focus_distance)
        )


def load_scene(filepath: PathLike) -> Tuple[CameraDescriptor, Scene]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (camera, scene)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[CameraDescriptor, Scene]:
    """Convenience function to parse a scene from a dictionary."""
    parser = SceneParser()
    return parser.parse_dict(data)


def _material_to_dict(material: Material) -> Dict[str, Any]:
    match material:
        case Lambert(albedo=albedo):
            return {'type': 'Lambert', 'albedo': list(albedo)}
        case Metal(albedo=albedo, fuzziness=fuzziness):
            return {'type': 'Metal', 'albedo': list(albedo), 'fuzziness': fuzziness}
        case Dielectric(refraction_index=refraction_index):
            return {'type': 'Transparent', 'refraction-index': refraction_index}
    raise SceneParseError(f"Cannot serialize material: {material!r}")


def dump_scene(camera: CameraDescriptor, scene: Scene,
               material_ids: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    """Build a scene description dictionary that `parse_scene` accepts.

    Args:
        camera: The camera descriptor
        scene: The scene to describe
        material_ids: Names for the material handles, in arena order
            (defaults to "material-<handle>")
    """
    if material_ids is None:
        material_ids = [f"material-{i}" for i in range(len(scene.materials))]
    if len(material_ids) != len(scene.materials):
        raise ValueError("material_ids must name every material in the scene")

    return {
        'camera': {
            'position': list(camera.position),
            'look-at': list(camera.look_at),
            'up': list(camera.up),
            'fov-vertical-degrees': camera.fov_vertical_degrees,
            'defocus-angle': camera.defocus_angle,
            'focus-distance': camera.focus_distance,
        },
        'materials': [
            {'id': name, 'material': _material_to_dict(material)}
            for name, material in zip(material_ids, scene.materials)
        ],
        'objects': [
            {
                'id': f"object-{i}",
                'position': list(obj.center),
                'material': material_ids[obj.material],
                'object': {'type': 'Sphere', 'radius': obj.radius},
            }
            for i, obj in enumerate(scene)
        ],
    }


def save_scene(filepath: PathLike, camera: CameraDescriptor, scene: Scene,
               material_ids: Optional[Sequence[str]] = None) -> None:
    """Write a scene description to a JSON (or .yaml/.yml) file."""
    path = Path(filepath)
    data = dump_scene(camera, scene, material_ids)
    if path.suffix in ('.yaml', '.yml'):
        path.write_text(yaml.safe_dump(data, sort_keys=False))
    else:
        path.write_text(json.dumps(data, indent=2))
    logger.info("Saved scene to %s", path)
