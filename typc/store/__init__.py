"""I/O collaborators: sample selection and the score log.

WHY: Reading samples and appending scores are the only file-system
operations the trainer performs. Isolating them here keeps the core pure
and gives each failure mode a typed exception the CLI can report.
"""
