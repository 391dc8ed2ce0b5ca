# flake8: noqa

from .hdf5 import (
    FORMAT_VERSION,
    from_bytes,
    load,
    save,
    to_bytes,
)
