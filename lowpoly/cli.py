import argparse
import sys
from pathlib import Path
from typing import List, Optional
from omegaconf import DictConfig
from tqdm import tqdm

from .config import load_config, register_configs, validate_config, setup_paths
from .errors import LowPolyError
from .pipeline import generate_from_file, save_result
from .preprocess import get_image_files
from .triangulation import create_triangulator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="lowpoly - Convert images to low-poly triangulations",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    def add_generation_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument('--config', type=str, default='config.yaml',
                         help='Path to configuration file')
        sub.add_argument('--sampler', type=str, choices=['grid', 'poisson', 'edge-aware'],
                         help='Override point sampler')
        sub.add_argument('--points', type=int, help='Override target point count')
        sub.add_argument('--seed', type=int, help='Override random seed')
        sub.add_argument('--max-size', type=int, help='Override maximum image dimension')
        sub.add_argument('--edge-weight', type=float, help='Override edge bias for edge-aware sampling')
        sub.add_argument('--color-space', type=str, choices=['rgb', 'lab'],
                         help='Override color averaging space')
        sub.add_argument('--no-neighbors', action='store_true',
                         help='Skip neighbor computation')
        sub.add_argument('--indent', type=int, help='Override JSON indentation')
        sub.add_argument('--set', dest='overrides', action='append', default=[], metavar='KEY=VALUE',
                         help='Additional config override, may be repeated')

    # Generate command
    generate_parser = subparsers.add_parser('generate', help='Triangulate a single image')
    generate_parser.add_argument('input', type=str, help='Input image path')
    generate_parser.add_argument('--output', type=str, required=True, help='Output JSON path')
    add_generation_args(generate_parser)

    # Batch command
    batch_parser = subparsers.add_parser('batch', help='Triangulate every image in a directory')
    batch_parser.add_argument('input_dir', type=str, help='Directory containing images')
    batch_parser.add_argument('--output-dir', type=str, help='Override output directory')
    add_generation_args(batch_parser)

    return parser


def build_overrides(args: argparse.Namespace) -> List[str]:
    """Translate command line flags into dotted config overrides."""
    overrides = []
    if args.sampler:
        overrides.append(f'generation.sampler={args.sampler}')
    if args.points is not None:
        overrides.append(f'generation.points={args.points}')
    if args.seed is not None:
        overrides.append(f'generation.seed={args.seed}')
    if args.max_size is not None:
        overrides.append(f'generation.max_size={args.max_size}')
    if args.edge_weight is not None:
        overrides.append(f'generation.edge_weight={args.edge_weight}')
    if args.color_space:
        overrides.append(f'generation.color_space={args.color_space}')
    if args.no_neighbors:
        overrides.append('generation.with_neighbors=false')
    if args.indent is not None:
        overrides.append(f'output.indent={args.indent}')
    if getattr(args, 'output_dir', None):
        overrides.append(f'output.dir={args.output_dir}')
    overrides.extend(args.overrides)
    return overrides


def run_generate(input_path: str, output_path: str, cfg: DictConfig) -> None:
    params = validate_config(cfg)
    triangulator = create_triangulator(cfg.triangulation.method)

    print(f"Processing input image: {input_path}")
    result = generate_from_file(input_path, params, triangulator, verbose=True)

    print(f"Saving JSON to {output_path}")
    save_result(result, output_path, indent=cfg.output.indent)


def run_batch(input_dir: str, cfg: DictConfig) -> int:
    """
    Triangulate all images in input_dir into cfg.output.dir.

    Returns:
        Number of images that failed
    """
    params = validate_config(cfg)
    triangulator = create_triangulator(cfg.triangulation.method)

    image_files = get_image_files(input_dir)
    if not image_files:
        print(f"No image files found in {input_dir}")
        return 0

    print(f"Found {len(image_files)} images to process")
    setup_paths(cfg)
    output_dir = Path(cfg.output.dir)

    failures = 0
    for image_path in tqdm(image_files):
        try:
            result = generate_from_file(image_path, params, triangulator)
            save_result(result, output_dir / f"{image_path.stem}_lowpoly.json",
                        indent=cfg.output.indent)
        except LowPolyError as e:
            print(f"Error processing {image_path}: {e}")
            failures += 1

    print(f"Batch processing complete: {len(image_files) - failures} succeeded, {failures} failed")
    return failures


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point for lowpoly."""
    parser = build_parser()
    args = parser.parse_args(argv)
    register_configs()

    if args.command is None:
        parser.print_help()
        return 1

    try:
        cfg = load_config(args.config, build_overrides(args))

        if args.command == 'generate':
            run_generate(args.input, args.output, cfg)
        elif args.command == 'batch':
            if run_batch(args.input_dir, cfg):
                return 1
    except LowPolyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
