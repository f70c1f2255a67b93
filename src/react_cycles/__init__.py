"""react-cycles: find circular state dependencies in React projects."""

__version__ = "0.1.0"
