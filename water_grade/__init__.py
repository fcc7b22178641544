"""Water quality grade classifier.

Reads loosely structured monitoring workbooks, locates the indicator columns by
keyword and grades every record against the surface water standard.
"""

__version__ = "0.1.0"
