"""Permite ejecutar la CLI con `python -m cli` (además del script `vr`)."""

from cli.main import run

if __name__ == "__main__":
    run()
