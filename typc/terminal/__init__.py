"""Terminal display and the interactive input loop.

WHY: This is the only package that talks to the terminal. Keeping curses
behind a small display interface lets the loop be driven by a scripted
fake in tests.

HOW: display.py wraps a curses screen and owns terminal-mode acquisition;
loop.py runs the render → read key → apply → check cycle.
"""
