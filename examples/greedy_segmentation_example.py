"""Greedy segmentation of a 3D digital curve into straight pieces.

Demonstrates: Naive3DDSSComputer (extend_front, get_parameters),
              digital_line_3d, setup_logging
Output:       one line per segment on stdout
              examples/greedy_segmentation_example.png

The curve is made of three digital straight lines glued end to end.  Each
segment is grown from the last point of the previous one until the next
point breaks straightness, which recovers the three pieces.
"""
import logging
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from dss3d import Naive3DDSSComputer, digital_line_3d, setup_logging

_OUT = os.path.join(os.path.dirname(__file__), "greedy_segmentation_example.png")


def _polyline(directions, lengths):
    pieces = []
    start = np.zeros(3, dtype=np.int64)
    for d, n in zip(directions, lengths):
        piece = digital_line_3d(d, n + 1, start=tuple(start))
        pieces.append(piece if not pieces else piece[1:])
        start = piece[-1]
    return np.concatenate(pieces)


def greedy_segments(curve, adjacency=8):
    """Yield ``(begin, end, parameters)`` of consecutive segments, each maximal to the right."""
    begin = 0
    dss = Naive3DDSSComputer(adjacency=adjacency)
    while begin < len(curve) - 1:
        dss.init(curve, begin)
        while dss.extend_front():
            pass
        yield dss.begin, dss.end, dss.get_parameters()
        # non-adjacent consecutive points give single-point segments
        begin = max(dss.end - 1, begin + 1)


def _render_png(curve, segments, out_path):
    fig = plt.figure(figsize=(5, 5), facecolor="#111")
    ax  = fig.add_subplot(111, projection="3d")
    ax.set_facecolor("#111"); ax.set_axis_off()
    colors = plt.cm.viridis(np.linspace(0.1, 0.9, len(segments)))
    for (begin, end, _), color in zip(segments, colors):
        pts = curve[begin:end]
        ax.plot(pts[:, 0], pts[:, 1], pts[:, 2], color=color, linewidth=2)
        ax.scatter(pts[:, 0], pts[:, 1], pts[:, 2], color=color, s=12)
    ax.set_title(f"{len(segments)} segments", color="white", fontsize=10)
    plt.savefig(out_path, dpi=150, bbox_inches="tight", facecolor="#111")
    plt.close()
    print(f"  Saved: {out_path}")


def main():
    setup_logging(logging.INFO)
    curve = _polyline([(5, 2, 1), (1, 4, 2), (-3, 1, 3)], [10, 8, 9])
    print("=" * 60)
    print(f"GREEDY SEGMENTATION: curve of {len(curve)} points")
    print("=" * 60)

    segments = list(greedy_segments(curve))
    for begin, end, (direction, intercept, thickness) in segments:
        print(
            f"  [{begin:3d}, {end:3d})  direction={direction.tolist()}  "
            f"intercept={np.round(intercept, 3).tolist()}  "
            f"thickness={np.round(thickness, 3).tolist()}"
        )
    _render_png(curve, segments, _OUT)


if __name__ == "__main__":
    main()
