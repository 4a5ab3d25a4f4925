"""Domain models for the chart data engine.

Field descriptors and their format specs, data sections, the dataset/row
model, configuration tree nodes and the drill option.
"""

from .config_node import ConfigNode
from .data_section import ChartDataSectionType, DataSection
from .dataset import ChartDataSet, DataSetFieldIndex, DataSetRow, transform_to_dataset
from .drill_option import ChartDrillOption, DrillCondition, DrillMode
from .field import FieldDescriptor
from .format_spec import FieldFormatType, FormatSpec, parse_format_spec
from .render_result import RenderResult

__all__ = [
    # Field configuration
    "FieldDescriptor",
    "FieldFormatType",
    "FormatSpec",
    "parse_format_spec",
    "ChartDataSectionType",
    "DataSection",
    "ConfigNode",
    # Dataset
    "ChartDataSet",
    "DataSetFieldIndex",
    "DataSetRow",
    "transform_to_dataset",
    # Drill
    "ChartDrillOption",
    "DrillCondition",
    "DrillMode",
    # Rendering
    "RenderResult",
]
