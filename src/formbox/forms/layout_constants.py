"""
Layout constants for formbox forms.

Centralizes spacing, margins and the label column width so every form
row lines up the same way.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FormBoxLayoutConfig:
    """Configuration for form layout spacing and margins."""

    # Main form layout settings
    main_layout_spacing: int = 4
    main_layout_margins: tuple = (4, 4, 4, 4)

    # Field row layout settings (between label and input area)
    row_spacing: int = 6
    row_margins: tuple = (1, 1, 1, 1)

    # Put labels above inputs instead of beside them
    stacked: bool = False

    # Fixed width of the label column; 0 lets labels size themselves
    label_width: int = 140

    # Input area settings (between controls placed in one row)
    input_spacing: int = 2


# Default compact configuration
COMPACT_LAYOUT = FormBoxLayoutConfig()

SPACIOUS_LAYOUT = FormBoxLayoutConfig(
    main_layout_spacing=8,
    main_layout_margins=(8, 8, 8, 8),
    row_spacing=10,
    row_margins=(2, 4, 2, 4),
    label_width=180,
    input_spacing=4,
)

# Labels stacked over inputs instead of beside them
STACKED_LAYOUT = FormBoxLayoutConfig(
    stacked=True,
    row_spacing=1,
    label_width=0,
)

# Current active configuration - change this to switch layouts globally
CURRENT_LAYOUT = COMPACT_LAYOUT
