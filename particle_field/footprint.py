import numpy as np
import xarray as xr

def occupancy_hist(ds: xr.Dataset, nx=40, ny=30):
    """
    Where the particles spent their time.

    ds is a record_run() Dataset. Returns (P, xedges, yedges) with P of
    shape (nx, ny) summing to 1 over [0, width] x [0, height].
    """
    width = float(ds.attrs["width"])
    height = float(ds.attrs["height"])

    xs = ds["x"].values.ravel()
    ys = ds["y"].values.ravel()

    # keep inside canvas (a shrink can leave stragglers for a frame)
    m = (xs >= 0) & (xs <= width) & (ys >= 0) & (ys <= height)
    xs = xs[m]; ys = ys[m]

    H, xedges, yedges = np.histogram2d(xs, ys, bins=[nx, ny],
                                      range=[[0.0, width], [0.0, height]])
    P = H / (H.sum() + 1e-12)
    return P, xedges, yedges
