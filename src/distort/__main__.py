"""Module entrypoint for `python -m distort`."""

if __package__ is None or __package__ == "":
    import sys
    from pathlib import Path

    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from distort.play_human import run_human


if __name__ == "__main__":
    run_human()
