from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from luxlab.parser.ies_parser import IESParseResult
from luxlab.photometry.metrics import DistributionMetrics
from luxlab.plotting.plots import PlotPaths
from luxlab.runner import RunResult

_MARGIN = 1.8 * cm
_TABLE_STYLE = TableStyle(
    [
        ("FONT", (0, 0), (-1, -1), "Helvetica", 9),
        ("FONT", (0, 0), (0, -1), "Helvetica-Bold", 9),
        ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#333333")),
        ("LINEBELOW", (0, 0), (-1, -1), 0.25, colors.HexColor("#cccccc")),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
    ]
)


def _kv_table(rows: Sequence[Sequence[str]]) -> Table:
    table = Table([list(r) for r in rows], colWidths=[5.5 * cm, 11.8 * cm], hAlign="LEFT")
    table.setStyle(_TABLE_STYLE)
    return table


def _document(out_pdf_path: Path, title: str) -> SimpleDocTemplate:
    out_pdf_path.parent.mkdir(parents=True, exist_ok=True)
    return SimpleDocTemplate(
        str(out_pdf_path),
        pagesize=A4,
        leftMargin=_MARGIN,
        rightMargin=_MARGIN,
        topMargin=_MARGIN,
        bottomMargin=_MARGIN,
        title=title,
        author="LuxLab",
    )


def _image(path: Optional[Path], width_cm: float = 15.0):
    if path is None or not Path(path).exists():
        return None
    img = Image(str(path))
    scale = (width_cm * cm) / float(img.imageWidth)
    img.drawWidth = width_cm * cm
    img.drawHeight = float(img.imageHeight) * scale
    return img


def build_view_report(
    parsed: IESParseResult,
    metrics: DistributionMetrics,
    plots: PlotPaths,
    out_pdf_path: Path,
    source_file: Optional[Path] = None,
) -> Path:
    """Luminaire datasheet: keywords, header, derived metrics and plots."""
    out_pdf_path = out_pdf_path.expanduser().resolve()
    styles = getSampleStyleSheet()
    body = styles["BodyText"]
    h2 = styles["Heading2"]
    phot = parsed.photometry
    hdr = parsed.header

    story: List = [Paragraph("LuxLab Luminaire Report", styles["Title"]), Spacer(1, 0.25 * cm)]
    story.append(Paragraph(f"<b>Source</b>: {source_file if source_file is not None else '-'}", body))
    if parsed.standard_line:
        story.append(Paragraph(f"<b>Standard</b>: {parsed.standard_line}", body))
    story.append(Spacer(1, 0.35 * cm))

    story.append(Paragraph("Photometry", h2))
    rows = [[k, v or "-"] for k, v in phot.metadata.items()]
    rows += [
        ["Lamps x lumens", f"{hdr.num_lamps:g} x {hdr.lumens_per_lamp:g}"],
        ["Candela multiplier", f"{hdr.candela_multiplier:g}"],
        ["Angles (V x H)", f"{phot.num_vertical} x {phot.num_horizontal}"],
        ["TILT", "INCLUDE" if parsed.tilt is not None else "NONE"],
        ["Summary lumens", f"{parsed.total_lumens:g}"],
        ["Peak candela", f"{metrics.peak_candela:g} at (H,V)=({metrics.peak_location[0]:g}°, {metrics.peak_location[1]:g}°)"],
        ["Symmetry (inferred)", metrics.symmetry_inferred],
    ]
    story.append(_kv_table(rows))
    story.append(Spacer(1, 0.35 * cm))

    for p in (plots.intensity_png, plots.polar_png):
        img = _image(p, width_cm=13.0)
        if img is not None:
            story.append(img)
            story.append(Spacer(1, 0.25 * cm))

    _document(out_pdf_path, "LuxLab Luminaire Report").build(story)
    return out_pdf_path


def build_calc_report(run: RunResult, out_pdf_path: Path) -> Path:
    """Room calculation summary: inputs, results and the heatmap if one was written."""
    out_pdf_path = out_pdf_path.expanduser().resolve()
    styles = getSampleStyleSheet()
    h2 = styles["Heading2"]
    room = run.project.room
    layout = run.layout
    grid = run.grid

    story: List = [Paragraph(f"LuxLab Calculation - {run.project.name}", styles["Title"]), Spacer(1, 0.25 * cm)]

    story.append(Paragraph("Room", h2))
    story.append(
        _kv_table(
            [
                ["Dimensions (L x W x H)", f"{room.length:g} x {room.width:g} x {room.height:g} m"],
                ["Mounting height", f"{room.mounting_height:g} m"],
                ["Workplane height", f"{room.workplane_height:g} m"],
                [
                    "Reflectances (C/W/F)",
                    f"{room.reflectances.ceiling:g} / {room.reflectances.walls:g} / {room.reflectances.floor:g}",
                ],
                ["Room cavity ratio", f"{run.rcr:g}"],
            ]
        )
    )
    story.append(Spacer(1, 0.3 * cm))

    story.append(Paragraph("Layout", h2))
    story.append(
        _kv_table(
            [
                ["Luminaire", f"{run.luminaire.name} ({run.luminaire.lumens:g} lm)"],
                ["Rows x columns", f"{layout.rows} x {layout.columns}"],
                ["Spacing (row / column)", f"{layout.row_spacing:g} / {layout.column_spacing:g} m"],
                ["First luminaire", f"({grid.positions[0].x:.2f}, {grid.positions[0].y:.2f}) m" if grid.positions else "-"],
            ]
        )
    )
    story.append(Spacer(1, 0.3 * cm))

    story.append(Paragraph("Results", h2))
    story.append(
        _kv_table(
            [
                ["Grid", f"{grid.resolution} x {grid.resolution}, {run.project.calc.samples_per_point} sample(s)/axis"],
                ["Average", f"{grid.average:.1f} lux"],
                ["Minimum", f"{grid.minimum:.1f} lux"],
                ["Maximum", f"{grid.maximum:.1f} lux"],
                ["Uniformity (Emin/Eavg)", f"{grid.uniformity:.2f}"],
            ]
        )
    )
    story.append(Spacer(1, 0.3 * cm))

    img = _image(run.artifacts.get("heatmap"))
    if img is not None:
        story.append(img)

    _document(out_pdf_path, "LuxLab Calculation Report").build(story)
    return out_pdf_path
