"""Dashboard widgets."""

from pi.dash.widgets.block import Block, Borders
from pi.dash.widgets.gauge import Gauge
from pi.dash.widgets.list import List, ListItem
from pi.dash.widgets.paragraph import Alignment, Paragraph, Wrap
from pi.dash.widgets.table import Row, Table
from pi.dash.widgets.tabs import Tabs

__all__ = [
    "Alignment",
    "Block",
    "Borders",
    "Gauge",
    "List",
    "ListItem",
    "Paragraph",
    "Row",
    "Table",
    "Tabs",
    "Wrap",
]
