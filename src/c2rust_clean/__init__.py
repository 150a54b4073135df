"""c2rust-clean - run and remember a project's clean command."""

__version__ = "0.1.0"
