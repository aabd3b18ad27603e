import numpy as np
import numpy.typing as npt

CONTROL = npt.NDArray[np.float64]  # (4, 2) control polygon
SAMPLES = npt.NDArray[np.float64]  # (n, 2) curve points or derivatives
PARAMS = npt.NDArray[np.float64]  # (n,) curve parameters in [0, 1]
VERTS = npt.NDArray[np.float32]  # flat vertex data for the GPU
PROJ = npt.NDArray[np.float32]
