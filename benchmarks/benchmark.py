import sys
import timeit

import numpy as np

from extrle.grid import Grid
from extrle.parsers import dump, parse


def random_pattern(width, height, states=2, seed=0):
    rng = np.random.default_rng(seed)
    grid = rng.integers(0, states, size=(height, width), dtype=np.uint8).view(Grid)
    return dump(grid.to_document('B3/S23'))


def benchmark_parse(text, number=5):
    seconds = timeit.timeit(lambda: parse(text), number=number) / number
    print(f'{len(text):10n} chars: {seconds * 1000:.1f} ms per parse', flush=True)


if __name__ == '__main__':
    if len(sys.argv) > 1:
        with open(sys.argv[1], encoding='utf-8') as f:
            benchmark_parse(f.read())
    else:
        benchmark_parse(random_pattern(500, 500))
        benchmark_parse(random_pattern(500, 500, states=256))
