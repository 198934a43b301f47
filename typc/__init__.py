"""typc: terminal typing trainer.

WHY: Practising touch typing on real prose is more useful than drilling
random letters. typc picks a text sample, lets the user type it in the
terminal with live correct/error highlighting, and scores the run.

HOW: Three layers, leaf to root:
  core      : reference text, keystroke model (SessionState), metrics
  render    : pure projection of the session onto a terminal-sized grid
  terminal  : curses display and the blocking read-key/update/redraw loop
The store package holds the two I/O collaborators (sample selection and
the append-only score log); cli.py wires everything together.

RULES:
- core and render never touch the terminal or the file system
- The terminal is acquired once per session and always restored
- Scores are appended, never rewritten
"""

__version__ = "0.1.0"
