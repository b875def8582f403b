from luxlab.design.placement import (
    LuminairePosition,
    SPACING_CRITERION,
    apply_centering,
    apply_suggested_spacing,
    centered_offsets,
    default_layout,
    luminaire_positions,
    suggested_spacing,
)

__all__ = [
    "LuminairePosition",
    "SPACING_CRITERION",
    "apply_centering",
    "apply_suggested_spacing",
    "centered_offsets",
    "default_layout",
    "luminaire_positions",
    "suggested_spacing",
]
