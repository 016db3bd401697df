"""Module entrypoint for `python -m qtclaunch`."""

from qtclaunch.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
