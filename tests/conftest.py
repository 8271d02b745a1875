import itertools
import math
import random

import matplotlib
import pytest

matplotlib.use("Agg")

from tsp import DistanceCache, Point, PointSet


def make_points(coords):
    return PointSet([Point(float(x), float(y), i) for i, (x, y) in enumerate(coords)])


def random_points(n, seed):
    rng = random.Random(seed)
    return make_points([(rng.uniform(0, 100), rng.uniform(0, 100)) for _ in range(n)])


def brute_force_length(cache):
    # Ponto 0 fixo, todas as permutações dos demais
    n = cache.num_points
    best = math.inf
    for rest in itertools.permutations(range(1, n)):
        route = (0,) + rest
        length = sum(cache.distance(route[k], route[(k + 1) % n]) for k in range(n))
        best = min(best, length)
    return best


def is_permutation(route, n):
    return sorted(route) == list(range(n))


@pytest.fixture
def square():
    return make_points([(0, 0), (1, 0), (1, 1), (0, 1)])


@pytest.fixture
def collinear():
    return make_points([(x, 0) for x in range(5)])


@pytest.fixture
def square_cache(square):
    return DistanceCache.build(square)
