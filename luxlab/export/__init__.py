from luxlab.export.pdf_report import build_calc_report, build_view_report

__all__ = ["build_calc_report", "build_view_report"]
