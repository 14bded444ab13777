"""World-generation control layer.

Turns a user-chosen geographic bounding box into a generation job for an
external backend: validates and classifies the selection, gates a single
in-flight job, dispatches it, and reports backend progress back to the
user.
"""

__version__ = "0.1.0"
