# utils/matrix.py
import copy
import numpy as np
import scipy.sparse as sp

# index/value buffers of the array-backed sparse formats
_SPARSE_BUFFERS = ("data", "indices", "indptr", "row", "col", "offsets")

def _freeze_sparse(M):
    if M.format in ("csr", "csc", "bsr", "coo", "dia"):
        frozen = M.copy()
    else:
        frozen = M.tocsr(copy=True)                      # dok / lil hold python containers
    if frozen.dtype.kind in "biu":
        frozen = frozen.astype(np.float64)
    if hasattr(frozen, "sum_duplicates"):
        frozen.sum_duplicates()                          # canonical form, so reads never write back
    for name in _SPARSE_BUFFERS:
        buf = getattr(frozen, name, None)
        if isinstance(buf, np.ndarray):
            buf.flags.writeable = False
    for buf in getattr(frozen, "coords", ()) or ():
        if isinstance(buf, np.ndarray):
            buf.flags.writeable = False
    return frozen

def freeze_matrix(M: "np.ndarray|sp.spmatrix|list"):
    """
    Return a private, read-only copy of ``M``.

    Dense array-likes become ndarrays (integer and boolean entries are promoted
    to float64, complex stays complex). Sparse matrices are copied with every
    index and value buffer locked. Values numpy cannot turn into a numeric
    array (ragged rows and the like) are deep-copied into an object array and
    left for the inversion routine to reject. No shape or rank checks are made.
    """
    if sp.issparse(M):
        return _freeze_sparse(M)

    try:
        arr = np.array(M, copy=True)
    except (ValueError, TypeError):
        try:
            arr = np.array(copy.deepcopy(M), dtype=object)
        except (ValueError, TypeError):
            arr = np.empty((), dtype=object)
            arr[()] = copy.deepcopy(M)
    if arr.dtype.kind in "biu":
        arr = arr.astype(np.float64)
    arr.flags.writeable = False
    return arr

def describe_shape(M) -> str:
    """Short 'rows x cols' label used in log messages."""
    shape = getattr(M, "shape", None)
    if shape is None:
        return "?"
    return " x ".join(str(n) for n in shape)
