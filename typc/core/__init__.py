"""Core typing model: reference text, keystroke state, and scoring.

WHY: The interesting logic of the trainer (how a keystroke changes the
typed-text model and how a finished session is scored) must be testable
without a terminal.

HOW: text.py defines the immutable ReferenceText, keys.py classifies raw
key codes, session.py holds the mutable SessionState, and metrics.py turns
a finished session into WPM/CPM/accuracy/consistency.

RULES:
- No module here imports the terminal or render packages
- No file-system access; samples arrive as plain strings
"""
