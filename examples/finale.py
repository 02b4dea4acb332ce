"""
Finale: sweep a row of bursts across the sky, then a ring of stars.

Every connected browser renders the same sequence, and anyone who connects
within the next couple of minutes still sees it in their history replay.

Run with the relay up:
    fireworks serve &
    python examples/finale.py
"""

import math
import time

from _common import check_backend, launch

SHAPES = ["burst", "ring", "star", "spiral"]


def main():
    check_backend()

    print("\nSweep:")
    for i in range(10):
        x = 0.05 + i * 0.1
        hue = int(255 * i / 9)
        result = launch(
            x=x,
            y=0.35 + 0.1 * math.sin(i),
            size=1.2,
            shape=SHAPES[i % len(SHAPES)],
            col={"r": 255, "g": hue, "b": 255 - hue},
            **{"from": "finale"},
        )
        print(f"  {result['event']['shape']:6s} x={x:.2f} -> {result['recipients']} viewer(s)")
        time.sleep(0.2)

    print("\nRing of stars:")
    for k in range(12):
        angle = 2 * math.pi * k / 12
        launch(
            x=0.5 + 0.3 * math.cos(angle),
            y=0.5 + 0.3 * math.sin(angle),
            size=0.8,
            shape="star",
            col={"r": 255, "g": 215, "b": 0},
            **{"from": "finale"},
        )
        time.sleep(0.1)

    # One oversized burst: the relay clamps size to 2.2
    result = launch(size=9.0, shape="burst", **{"from": "finale"})
    print(f"\nGrand burst recorded with size={result['event']['size']}")


if __name__ == "__main__":
    main()
