"""pi-dash: terminal dashboard with constraint layouts and a braille map canvas."""

# Application state and views
from pi.dash.app import App, TabsState

# Cell buffer
from pi.dash.buffer import Buffer, Cell, Frame

# Projection canvas
from pi.dash.canvas import (
    Canvas,
    Domain,
    Label,
    Layer,
    Line,
    Map,
    MapResolution,
    Marker,
    Points,
    Rectangle,
    project,
)

# Configuration
from pi.dash.config import DashConfig, load_config

# Data providers
from pi.dash.data import (
    DataProvider,
    JsonDataProvider,
    LogEntry,
    ServerRecord,
    StaticDataProvider,
    Task,
)

# Frame driver
from pi.dash.driver import Dashboard

# Errors
from pi.dash.errors import (
    DashError,
    DataProviderError,
    InvalidConstraintConfiguration,
    TerminalIOError,
)

# Keyboard input handling
from pi.dash.keys import Key, KeyId, parse_key

# Layout
from pi.dash.layout import (
    Constraint,
    Direction,
    Layout,
    Length,
    Min,
    Percentage,
    Ratio,
    Rect,
    split,
)

# Selection
from pi.dash.selection import ListState, StatefulList, TableState

# Styles and text
from pi.dash.style import Color, Modifier, Style
from pi.dash.text import Span, Spans, Text

# Terminal interface and implementation
from pi.dash.terminal import ProcessTerminal, Terminal

__all__ = [
    # App
    "App",
    "TabsState",
    # Buffer
    "Buffer",
    "Cell",
    "Frame",
    # Canvas
    "Canvas",
    "Domain",
    "Label",
    "Layer",
    "Line",
    "Map",
    "MapResolution",
    "Marker",
    "Points",
    "Rectangle",
    "project",
    # Config
    "DashConfig",
    "load_config",
    # Data
    "DataProvider",
    "JsonDataProvider",
    "LogEntry",
    "ServerRecord",
    "StaticDataProvider",
    "Task",
    # Driver
    "Dashboard",
    # Errors
    "DashError",
    "DataProviderError",
    "InvalidConstraintConfiguration",
    "TerminalIOError",
    # Keys
    "Key",
    "KeyId",
    "parse_key",
    # Layout
    "Constraint",
    "Direction",
    "Layout",
    "Length",
    "Min",
    "Percentage",
    "Ratio",
    "Rect",
    "split",
    # Selection
    "ListState",
    "StatefulList",
    "TableState",
    # Style / text
    "Color",
    "Modifier",
    "Style",
    "Span",
    "Spans",
    "Text",
    # Terminal
    "ProcessTerminal",
    "Terminal",
]
