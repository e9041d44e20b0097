"""craftstatus: see which repositories in a SRC workspace are behind upstream."""

__version__ = "0.1.0"
