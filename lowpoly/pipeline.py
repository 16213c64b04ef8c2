import json
import time
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .color import average_color, prepare_color_field
from .edges import create_edge_map
from .errors import InvalidInputError
from .preprocess import load_image, normalize_image
from .sampling import add_border_points, sample_points
from .triangulation import Triangulation, Triangulator, create_triangulator
from .types import GenerationParameters, LowPolyResult, PixelBuffer, Sampler, Triangle
from .utils import make_rng, triangle_area, triangle_centroid, within_bounds


MIN_TRIANGLE_AREA = 1.0


def build_triangles(triangulation: Triangulation, buffer: PixelBuffer,
                    params: GenerationParameters) -> Tuple[List[Triangle], Dict[int, int]]:
    """
    Filter triangulator faces and compute their geometry and color.

    Faces with a vertex outside the image or an area below MIN_TRIANGLE_AREA
    are dropped. Survivors get ids 1, 2, ... in face order.

    Args:
        triangulation: Faces over the augmented point set
        buffer: Normalized pixel buffer
        params: Generation parameters (color space is used here)

    Returns:
        (triangles, face_to_id) where face_to_id maps surviving face indices
        to triangle ids
    """
    field = prepare_color_field(buffer, params.color_space)
    triangles = []
    face_to_id = {}

    for face_index in range(len(triangulation)):
        vertices = triangulation.face_vertices(face_index)

        if not within_bounds(vertices, buffer.width, buffer.height):
            continue

        area = triangle_area(vertices)
        if area < MIN_TRIANGLE_AREA:
            continue

        tri_id = len(triangles) + 1
        triangles.append(Triangle(
            id=tri_id,
            vertices=tuple((float(x), float(y)) for x, y in vertices),
            centroid=triangle_centroid(vertices),
            area_px=float(area),
            avg_color=average_color(vertices, buffer, field, params.color_space),
        ))
        face_to_id[face_index] = tri_id

    return triangles, face_to_id


def resolve_neighbors(triangles: List[Triangle], face_to_id: Dict[int, int],
                      triangulation: Triangulation) -> None:
    """
    Fill each triangle's neighbor ids from the face adjacency.

    Neighbors whose face was filtered out are skipped, and repeated
    neighbors are listed once.
    """
    id_to_face = {tri_id: face for face, tri_id in face_to_id.items()}

    for tri in triangles:
        neighbors = []
        for neighbor_face in triangulation.face_neighbors(id_to_face[tri.id]):
            neighbor_id = face_to_id.get(int(neighbor_face))
            if neighbor_id is not None and neighbor_id != tri.id and neighbor_id not in neighbors:
                neighbors.append(neighbor_id)
        tri.neighbors = neighbors


def assemble_result(buffer: PixelBuffer, source_name: str, params: GenerationParameters,
                    triangles: List[Triangle]) -> LowPolyResult:
    return LowPolyResult(
        width=buffer.width,
        height=buffer.height,
        source=source_name,
        params=params,
        triangles=triangles,
    )


def generate(image: PixelBuffer, source_name: str, params: GenerationParameters,
             triangulator: Optional[Triangulator] = None, verbose: bool = False) -> LowPolyResult:
    """
    Convert an image into a low-poly triangulation.

    Args:
        image: Source pixel buffer, rescaled to params.max_size if larger
        source_name: Identifier stored in the result metadata
        params: Generation parameters
        triangulator: Triangulation provider, Delaunay when None
        verbose: Print progress for each stage

    Returns:
        The complete result; any failure raises instead

    Raises:
        InvalidInputError: Bad parameters or image, before any sampling
        TriangulationError: The point set could not be triangulated
    """
    if not isinstance(params, GenerationParameters):
        raise InvalidInputError(f"Expected GenerationParameters, got {type(params).__name__}")
    params.validate()
    if not isinstance(image, PixelBuffer):
        raise InvalidInputError(f"Expected a PixelBuffer, got {type(image).__name__}")

    if triangulator is None:
        triangulator = create_triangulator()

    start_time = time.time()

    buffer = normalize_image(image, params.max_size)
    width, height = buffer.width, buffer.height
    if verbose:
        print(f"Image: {image.width}x{image.height} -> {width}x{height}")

    rng = make_rng(params.seed)
    edge_map = create_edge_map(buffer) if params.sampler == Sampler.EDGE_AWARE else None

    points = sample_points(params, width, height, rng, edge_map)
    if verbose:
        print(f"Sampled {len(points)} points ({params.sampler.value})")

    points = add_border_points(points, width, height)

    triangulation = triangulator.triangulate(points, with_neighbors=params.with_neighbors)
    if verbose:
        print(f"Triangulated {len(points)} points into {len(triangulation)} faces")

    triangles, face_to_id = build_triangles(triangulation, buffer, params)

    if params.with_neighbors:
        resolve_neighbors(triangles, face_to_id, triangulation)

    if verbose:
        print(f"Kept {len(triangles)} triangles in {time.time() - start_time:.3f} seconds")

    return assemble_result(buffer, source_name, params, triangles)


def generate_from_file(image_path: Union[str, Path], params: GenerationParameters,
                       triangulator: Optional[Triangulator] = None,
                       verbose: bool = False) -> LowPolyResult:
    """Decode an image file and run generate() with its file name as source."""
    params.validate()
    buffer = load_image(image_path)
    return generate(buffer, Path(image_path).name, params, triangulator, verbose)


def save_result(result: LowPolyResult, output_path: Union[str, Path], indent: Optional[int] = 2) -> None:
    """Write a result as JSON."""
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(result.to_dict(), f, indent=indent)


def load_result(path: Union[str, Path]) -> LowPolyResult:
    with open(path, 'r', encoding='utf-8') as f:
        return LowPolyResult.from_dict(json.load(f))
