"""Allow `python -m c2rust_clean`."""

from c2rust_clean.cli import app

app(prog_name="c2rust-clean")
