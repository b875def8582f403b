from __future__ import annotations

import argparse
import logging
from pathlib import Path

from luxlab.database.library import demo_ies_path
from luxlab.design.placement import apply_suggested_spacing, default_layout
from luxlab.parser.errors import ParseError
from luxlab.parser.ies_parser import parse_ies_text
from luxlab.photometry.metrics import compute_distribution_metrics
from luxlab.plotting.plots import save_default_plots
from luxlab.project.io import load_project, save_project
from luxlab.project.presets import default_project, reflectance_preset
from luxlab.project.schema import LuminaireRef, Project, ProjectError
from luxlab.runner import run_project


def _check_file(path: Path, what: str = "File") -> bool:
    if not path.exists():
        print(f"[ERROR] {what} not found: {path}")
        return False
    if not path.is_file():
        print(f"[ERROR] Not a file: {path}")
        return False
    return True


def _cmd_demo(args: argparse.Namespace) -> int:
    try:
        src = demo_ies_path(args.luminaire)
    except KeyError as e:
        print(f"[ERROR] {e.args[0]}")
        return 2
    outpath = Path(args.out).expanduser().resolve()
    outpath.parent.mkdir(parents=True, exist_ok=True)
    outpath.write_text(src.read_text(encoding="utf-8"), encoding="utf-8")
    print(f"Saved demo IES to: {outpath}")
    return 0


def _cmd_view(args: argparse.Namespace) -> int:
    ies_path = Path(args.file).expanduser().resolve()
    outdir = Path(args.out).expanduser().resolve()
    if not _check_file(ies_path):
        print("        Provide a valid path to a .ies file.")
        return 2

    text = ies_path.read_text(encoding="utf-8", errors="replace")
    try:
        parsed = parse_ies_text(text, source_path=ies_path)
    except ParseError as e:
        print(f"[ERROR] {e}")
        return 3

    phot = parsed.photometry
    metrics = compute_distribution_metrics(phot)

    print("LuxLab View")
    print(f"  File: {ies_path}")
    for key, value in phot.metadata.items():
        print(f"  {key}: {value}")
    print(f"  Angles: {phot.num_vertical} vertical x {phot.num_horizontal} horizontal")
    print(f"  Lumens: {parsed.total_lumens:g}" + ("" if phot.total_lumens is not None else " (absolute photometry, peak cd)"))
    print(
        f"  Peak candela: {metrics.peak_candela:g} "
        f"at (H,V)=({metrics.peak_location[0]:g}°, {metrics.peak_location[1]:g}°)"
    )
    print(f"  Symmetry: {metrics.symmetry_inferred}")

    if args.no_plots:
        return 0
    if phot.num_vertical == 0 or phot.num_horizontal == 0:
        print("[WARN] Empty angle tables; skipping plots.")
        return 0

    paths = save_default_plots(phot, outdir, stem=args.stem)
    print(f"  Saved: {paths.intensity_png}")
    print(f"  Saved: {paths.polar_png}")
    if args.pdf:
        from luxlab.export.pdf_report import build_view_report

        pdf_path = build_view_report(parsed, metrics, paths, outdir / f"{args.stem}_report.pdf", source_file=ies_path)
        print(f"  Saved: {pdf_path}")
    return 0


def _apply_overrides(project: Project, args: argparse.Namespace) -> Project:
    room = project.room
    for attr in ("length", "width", "height", "mounting_height", "workplane_height"):
        v = getattr(args, attr)
        if v is not None:
            setattr(room, attr, float(v))
    if args.reflectances is not None:
        room.reflectances = reflectance_preset(args.reflectances)

    if args.rows is not None or args.columns is not None:
        rows = args.rows if args.rows is not None else project.layout.rows
        columns = args.columns if args.columns is not None else project.layout.columns
        base = default_layout(room, rows=rows, columns=columns)
        base.centered = True
        project.layout = base
    if args.suggest_spacing:
        project.layout = apply_suggested_spacing(room, project.layout)
    layout = project.layout
    if args.row_spacing is not None:
        layout.row_spacing = float(args.row_spacing)
    if args.column_spacing is not None:
        layout.column_spacing = float(args.column_spacing)
    if args.offset_x is not None or args.offset_y is not None:
        layout.offset_x = args.offset_x
        layout.offset_y = args.offset_y
        layout.centered = False
    elif args.row_spacing is not None or args.column_spacing is not None:
        layout.centered = True

    if args.resolution is not None:
        project.calc.grid_resolution = int(args.resolution)
    if args.samples is not None:
        project.calc.samples_per_point = int(args.samples)

    if args.ies is not None:
        project.luminaire = LuminaireRef(path=str(Path(args.ies).expanduser().resolve()))
    elif args.demo is not None:
        project.luminaire = LuminaireRef(demo=args.demo)
    return project


def _cmd_calc(args: argparse.Namespace) -> int:
    if args.project is not None:
        project_path = Path(args.project).expanduser().resolve()
        if not _check_file(project_path, "Project file"):
            return 2
        try:
            project = load_project(project_path)
        except ProjectError as e:
            print(f"[ERROR] {e}")
            return 3
    else:
        project = default_project()

    if args.ies is not None and not _check_file(Path(args.ies).expanduser().resolve()):
        return 2
    project = _apply_overrides(project, args)

    out = Path(args.out).expanduser().resolve() if args.out else None
    if args.pdf and out is None:
        print("[ERROR] --pdf requires --out")
        return 2
    try:
        result = run_project(project, out_dir=out, plots=not args.no_plots)
    except (ParseError, ProjectError) as e:
        print(f"[ERROR] {e}")
        return 3

    grid = result.grid
    print("LuxLab Calc")
    print(f"  Project: {project.name}")
    print(f"  Luminaire: {result.luminaire.name} ({result.luminaire.lumens:g} lm) x {len(grid.positions)}")
    print(f"  Grid: {grid.resolution} x {grid.resolution}, {project.calc.samples_per_point} sample(s)/axis")
    print(f"  Average: {grid.average:.1f} lux")
    print(f"  Min / Max: {grid.minimum:.1f} / {grid.maximum:.1f} lux")
    print(f"  Uniformity (Emin/Eavg): {grid.uniformity:.2f}")
    print(f"  Room cavity ratio: {result.rcr:g}")
    for path in result.artifacts.values():
        print(f"  Saved: {path}")

    if args.pdf:
        from luxlab.export.pdf_report import build_calc_report

        pdf_path = build_calc_report(result, out / "calc_report.pdf")
        print(f"  Saved: {pdf_path}")
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    path = Path(args.project).expanduser().resolve()
    if path.exists() and not args.force:
        print(f"[ERROR] Refusing to overwrite existing file: {path} (use --force)")
        return 2
    project = default_project(name=args.name, demo=args.demo)
    save_project(project, path)
    print(f"Saved project to: {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="luxlab")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    demo = sub.add_parser("demo", help="Write a demo .ies file to disk.")
    demo.add_argument("--out", default="data/ies_samples/demo.ies", help="Output .ies path")
    demo.add_argument("--luminaire", default="wide-batwing", help="Demo luminaire id")
    demo.set_defaults(func=_cmd_demo)

    v = sub.add_parser("view", help="Parse an IES file, print a summary and save plots (PNG), optionally PDF.")
    v.add_argument("file", help="Path to .ies file")
    v.add_argument("--out", default="out", help="Output directory (default: out)")
    v.add_argument("--stem", default="luxlab_view", help="Filename stem for outputs")
    v.add_argument("--pdf", action="store_true", help="Also generate a PDF report")
    v.add_argument("--no-plots", action="store_true", help="Only print the summary")
    v.set_defaults(func=_cmd_view)

    c = sub.add_parser("calc", help="Compute workplane illuminance for a room and luminaire array.")
    c.add_argument("project", nargs="?", help="Project JSON (default: built-in demo room)")
    src = c.add_mutually_exclusive_group()
    src.add_argument("--ies", help="Path to .ies file")
    src.add_argument("--demo", help="Demo luminaire id")
    c.add_argument("--length", type=float)
    c.add_argument("--width", type=float)
    c.add_argument("--height", type=float)
    c.add_argument("--mounting-height", dest="mounting_height", type=float)
    c.add_argument("--workplane-height", dest="workplane_height", type=float)
    c.add_argument("--reflectances", choices=["light", "medium", "dark"])
    c.add_argument("--rows", type=int)
    c.add_argument("--columns", type=int)
    c.add_argument("--row-spacing", dest="row_spacing", type=float)
    c.add_argument("--column-spacing", dest="column_spacing", type=float)
    c.add_argument("--offset-x", dest="offset_x", type=float)
    c.add_argument("--offset-y", dest="offset_y", type=float)
    c.add_argument(
        "--suggest-spacing",
        action="store_true",
        help="Set row/column spacing from 1.3 x mounting gap, capped to fit the room",
    )
    c.add_argument("--resolution", type=int, help="Grid cells per side")
    c.add_argument("--samples", type=int, help="Sub-samples per cell axis")
    c.add_argument("--out", help="Output directory for result.json, grid.csv and plots")
    c.add_argument("--no-plots", action="store_true")
    c.add_argument("--pdf", action="store_true", help="Also generate a PDF report (needs --out)")
    c.set_defaults(func=_cmd_calc)

    i = sub.add_parser("init", help="Write a default project file.")
    i.add_argument("project", help="Output project JSON path")
    i.add_argument("--name", default="LuxLab project")
    i.add_argument("--demo", default="wide-batwing", help="Demo luminaire id")
    i.add_argument("--force", action="store_true")
    i.set_defaults(func=_cmd_init)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
