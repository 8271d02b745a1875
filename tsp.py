import sys
import os
import math
import json
import heapq
import random
import argparse
import multiprocessing as mp
import time
import warnings
import logging
from contextlib import nullcontext
from dataclasses import dataclass, field
from datetime import timedelta
from itertools import combinations, count
import matplotlib.pyplot as plt
import numpy as np

from gerador_tsp import gerar_arquivo_tsp

# Configuração de logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(message)s')
logger = logging.getLogger(__name__)

# CONFIGURAÇÕES
CONFIG = {
    'round_digits': 8,
    'infinity': float('inf'),
    'workers': max(1, mp.cpu_count() - 1),
    'parallel_min_points': 200,
    'local': {
        'default_time': 60,
        'restart_log_frequency': 100,
    },
    'exact': {
        'warn_above': 20,
        'strategy': 'dfs',
        'parallel_expand_min': 10,
    },
}

# ERROS
class InvalidInput(ValueError):
    """Conjunto de pontos rejeitado antes de qualquer busca."""


class InfeasibleBound(IndexError):
    """Consulta de distância com índice fora do intervalo 0..N-1."""


class ExhaustedWarning(UserWarning):
    """Busca exata pedida para um N grande demais para terminar em tempo útil."""


def round_distance(value):
    # Mesma granularidade em todas as comparações contra o limite
    return round(value, CONFIG['round_digits'])

# MODELO DE DADOS
@dataclass(frozen=True)
class Point:
    x: float
    y: float
    id: int


@dataclass
class Tour:
    route: list = field(default_factory=list)
    distance: float = 0.0

    def copy(self):
        return Tour(list(self.route), self.distance)

    def to_dict(self):
        return {'route': [int(i) for i in self.route], 'distance': float(self.distance)}


@dataclass
class Branch:
    route: list
    total_distance: float
    heuristic_estimate: float

    @property
    def priority(self):
        return self.total_distance + self.heuristic_estimate


class PointSet:
    def __init__(self, points):
        parsed = []
        for p in points:
            if isinstance(p, Point):
                parsed.append(p)
                continue
            try:
                parsed.append(Point(float(p['x']), float(p['y']), int(p['id'])))
            except (KeyError, TypeError, ValueError) as e:
                raise InvalidInput(f"Ponto inválido: {p!r} ({e})")

        if len(parsed) < 2:
            raise InvalidInput(f"São necessários pelo menos 2 pontos, recebidos {len(parsed)}.")

        parsed.sort(key=lambda p: p.id)
        if [p.id for p in parsed] != list(range(len(parsed))):
            raise InvalidInput("Os ids dos pontos precisam ser contíguos a partir de 0.")

        if not all(math.isfinite(p.x) and math.isfinite(p.y) for p in parsed):
            raise InvalidInput("Coordenadas precisam ser números finitos.")

        self._points = tuple(parsed)

    def __len__(self):
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def __getitem__(self, index):
        return self._points[index]

    def coordinates(self):
        return np.array([(p.x, p.y) for p in self._points], dtype=float)

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict) or 'points' not in data:
            raise InvalidInput("Esperado um objeto JSON com a chave 'points'.")
        return cls(data['points'])

# RASTREAMENTO DE PROGRESSO
class ProgressTracker:
    """Comprimento registrado a cada etapa do solver (guloso, 2-opt, reinícios, busca exata)."""

    def __init__(self):
        self.history = []
        self.best_length = float('inf')
        self.started = time.time()

    def update(self, length, stage=""):
        self.best_length = min(self.best_length, length)
        self.history.append({
            'iteration': len(self.history) + 1,
            'length': length,
            'best': self.best_length,
            'stage': stage,
            'elapsed': time.time() - self.started,
        })

    def stage_summary(self):
        # Melhor comprimento e instante de cada etapa, na ordem em que apareceram
        summary = {}
        for entry in self.history:
            stage = summary.setdefault(entry['stage'], {'length': entry['length'], 'elapsed': entry['elapsed']})
            if entry['length'] < stage['length']:
                stage.update(length=entry['length'], elapsed=entry['elapsed'])
        return summary

    def get_gap_history(self, final_length):
        # Gap percentual do melhor parcial; piso de 0.1 para a escala log
        if not self.history or not final_length:
            return []
        return [{'iteration': entry['iteration'],
                 'gap': max(0.1, (entry['best'] - final_length) / final_length * 100)}
                for entry in self.history]

# CACHE DE DISTÂNCIAS
class DistanceCache:
    def __init__(self, pairs, num_points):
        self._pairs = pairs
        self.num_points = num_points

    def __len__(self):
        return self.num_points

    @property
    def pair_count(self):
        return len(self._pairs)

    def distance(self, i, j):
        if not (0 <= i < self.num_points and 0 <= j < self.num_points):
            raise InfeasibleBound(f"Índices fora do intervalo: ({i}, {j}) com N={self.num_points}")
        if i == j:
            return 0.0
        # Chave ausente não ocorre para índices válidos
        return self._pairs[(i, j) if i < j else (j, i)]

    @staticmethod
    def _rows_worker(args):
        coords, rows = args
        entries = []
        for i in rows:
            diff = coords[i + 1:] - coords[i]
            dists = np.sqrt(np.sum(diff ** 2, axis=1))
            entries.extend(((i, i + 1 + k), float(d)) for k, d in enumerate(dists))
        return entries

    @staticmethod
    def build(points, workers=1):
        coords = points.coordinates()
        n = len(coords)

        if workers > 1 and n >= CONFIG['parallel_min_points']:
            # Linhas intercaladas para equilibrar: a linha i tem n-1-i pares
            chunks = [range(k, n - 1, workers) for k in range(workers)]
            with mp.Pool(workers) as pool:
                results = pool.map(DistanceCache._rows_worker, [(coords, rows) for rows in chunks])
        else:
            results = [DistanceCache._rows_worker((coords, range(n - 1)))]

        pairs = {}
        for entries in results:
            pairs.update(entries)

        logger.info(f"Distance cache built: {len(pairs)} pairs for {n} points")
        return DistanceCache(pairs, n)


def tour_length(cache, route):
    length = 0.0
    for current, nxt in zip(route, route[1:]):
        length += cache.distance(current, nxt)

    is_complete = len(route) == cache.num_points
    if is_complete:
        length += cache.distance(route[-1], route[0])
    return length, is_complete

# ESTADO COMPARTILHADO ENTRE PROCESSOS
class BestSoFar:
    """Limite global e a rota que o atinge, protegidos por um único lock.

    Os dois campos vivem em memória compartilhada para que os workers do
    pool leiam e gravem o mesmo par. bound() e tour() chamados em
    sequência podem ver atualizações diferentes; só tour() lê o par junto.
    """

    def __init__(self, num_points, bound=None, route=None):
        self.lock = mp.Lock()
        self._bound = mp.RawValue('d', CONFIG['infinity'] if bound is None else bound)
        self._route = mp.RawArray('i', list(route) if route is not None else list(range(num_points)))

    def bound(self):
        with self.lock:
            return self._bound.value

    def offer(self, route, distance):
        with self.lock:
            # Revalida dentro da seção crítica antes de gravar
            if round_distance(distance) < round_distance(self._bound.value):
                self._bound.value = distance
                self._route[:] = route
                return True
        return False

    def tour(self):
        with self.lock:
            return Tour(list(self._route), self._bound.value)


_WORKER_CACHE = None
_WORKER_BEST = None


def _init_worker(cache, best=None):
    global _WORKER_CACHE, _WORKER_BEST
    _WORKER_CACHE = cache
    _WORKER_BEST = best


def worker_pool(cache, workers, best=None):
    return mp.Pool(workers, initializer=_init_worker, initargs=(cache, best))

# CONSTRUÇÃO DE TOUR
class TourBuilder:
    @staticmethod
    def greedy(cache):
        """Vizinho mais próximo a partir do ponto 0, empate pelo menor índice."""
        unvisited = set(range(1, cache.num_points))
        route = [0]

        current = 0
        while unvisited:
            nearest = min(unvisited, key=lambda j: (cache.distance(current, j), j))
            route.append(nearest)
            unvisited.remove(nearest)
            current = nearest

        return Tour(route, tour_length(cache, route)[0])

    @staticmethod
    def random_tour(cache, rng=random):
        route = list(range(cache.num_points))
        rng.shuffle(route)
        return Tour(route, tour_length(cache, route)[0])

# OTIMIZAÇÕES LOCAIS
class LocalOptimizer:
    @staticmethod
    def delta(cache, route, i, j):
        n = len(route)
        a, b = route[i], route[(i + 1) % n]
        c, d = route[j], route[(j + 1) % n]

        added = (cache.distance(a, c) + cache.distance(b, d) -
                 cache.distance(a, b) - cache.distance(c, d))
        return round_distance(added)

    @staticmethod
    def swap(route, i, j):
        route[i + 1:j + 1] = reversed(route[i + 1:j + 1])

    @staticmethod
    def _first_moves(cache, route, rows):
        # Primeira melhoria de cada linha i
        moves = []
        n = len(route)
        for i in rows:
            for j in range(i + 1, n):
                if LocalOptimizer.delta(cache, route, i, j) < 0:
                    moves.append((i, j))
                    break
        return moves

    @staticmethod
    def _scan_rows_task(args):
        route, rows = args
        return LocalOptimizer._first_moves(_WORKER_CACHE, route, rows)

    @staticmethod
    def _apply(cache, tour, i, j):
        # Recalcula sobre a rota viva: o delta do scan pode estar obsoleto
        delta = LocalOptimizer.delta(cache, tour.route, i, j)
        if delta < 0:
            LocalOptimizer.swap(tour.route, i, j)
            tour.distance += delta
            return True
        return False

    @staticmethod
    def _sequential_pass(cache, tour):
        improved = False
        n = len(tour.route)
        for i in range(n):
            for j in range(i + 1, n):
                if LocalOptimizer._apply(cache, tour, i, j):
                    improved = True
                    break
        return improved

    @staticmethod
    def _parallel_pass(cache, tour, pool, workers):
        n = len(tour.route)
        snapshot = list(tour.route)
        tasks = [(snapshot, range(k, n, workers)) for k in range(workers)]
        results = pool.map(LocalOptimizer._scan_rows_task, tasks)

        # Redução das flags locais na barreira entre passadas
        if not any(results):
            return False

        moves = sorted(move for found in results for move in found)
        applied = 0
        for i, j in moves:
            if LocalOptimizer._apply(cache, tour, i, j):
                applied += 1
        logger.debug(f"2-opt pass: {applied}/{len(moves)} moves applied")
        return applied > 0

    @staticmethod
    def two_opt(tour, cache, pool=None, workers=1, tracker=None, label="2-opt"):
        best = tour.copy()
        n = len(best.route)

        if n >= 4:
            parallel = pool is not None and workers > 1 and n >= CONFIG['parallel_min_points']
            passes = 0
            improved = True
            while improved:
                passes += 1
                if parallel:
                    improved = LocalOptimizer._parallel_pass(cache, best, pool, workers)
                else:
                    improved = LocalOptimizer._sequential_pass(cache, best)
            logger.debug(f"{label}: converged after {passes} passes")

        # Corrige o erro de ponto flutuante acumulado nos deltas
        incremental = best.distance
        best.distance = tour_length(cache, best.route)[0]
        if round_distance(best.distance) != round_distance(incremental):
            logger.debug(f"{label}: incremental length drifted by {best.distance - incremental:.10f}")

        if tracker:
            tracker.update(best.distance, label)
        return best

# LIMITE INFERIOR (MST)
class UnionFind:
    def __init__(self, size):
        self.parent = list(range(size))

    def find(self, i):
        if self.parent[i] != i:
            self.parent[i] = self.find(self.parent[i])
        return self.parent[i]

    def union(self, x, y):
        xset, yset = self.find(x), self.find(y)
        if xset == yset:
            return False
        self.parent[xset] = yset
        return True


class LowerBound:
    @staticmethod
    def mst_weight(cache, nodes):
        """Kruskal sobre as distâncias do cache restritas a `nodes`."""
        nodes = list(nodes)
        if len(nodes) < 2:
            return 0.0

        position = {node: k for k, node in enumerate(nodes)}
        edges = sorted((cache.distance(u, v), u, v) for u, v in combinations(nodes, 2))

        forest = UnionFind(len(nodes))
        weight = 0.0
        merged = 0
        for d, u, v in edges:
            if forest.union(position[u], position[v]):
                weight += d
                merged += 1
                if merged == len(nodes) - 1:
                    break
        return weight

# BRANCH AND BOUND
class BranchAndBound:
    @staticmethod
    def _explore(cache, best, route, distance, unvisited):
        if len(route) == cache.num_points:
            total = distance + cache.distance(route[-1], route[0])
            if best.offer(route, total):
                logger.debug(f"New bound {total:.4f}")
            return

        # Uma leitura por nível; um limite defasado só deixa de podar
        stale_bound = round_distance(best.bound())
        tail = route[-1]
        candidates = sorted((cache.distance(tail, node), node) for node in unvisited)

        for step, node in candidates:
            if round_distance(distance + step) >= stale_bound:
                break
            route.append(node)
            unvisited.remove(node)
            BranchAndBound._explore(cache, best, route, distance + step, unvisited)
            unvisited.add(node)
            route.pop()

    @staticmethod
    def _subtree(cache, best, second):
        route = [0, second]
        unvisited = set(range(1, cache.num_points))
        unvisited.discard(second)
        BranchAndBound._explore(cache, best, route, cache.distance(0, second), unvisited)
        return second

    @staticmethod
    def _subtree_task(second):
        return BranchAndBound._subtree(_WORKER_CACHE, _WORKER_BEST, second)

    @staticmethod
    def _seeded(cache, initial):
        if initial is None:
            return BestSoFar(cache.num_points)
        return BestSoFar(cache.num_points, initial.distance, initial.route)

    @staticmethod
    def depth_first(cache, initial=None, workers=1, tracker=None):
        """Busca exata recursiva, um subárvore por escolha do segundo ponto."""
        best = BranchAndBound._seeded(cache, initial)
        seconds = list(range(1, cache.num_points))

        if workers > 1:
            with worker_pool(cache, workers, best) as pool:
                for second in pool.imap_unordered(BranchAndBound._subtree_task, seconds):
                    logger.debug(f"Subtree rooted at 0 -> {second} finished")
        else:
            for second in seconds:
                BranchAndBound._subtree(cache, best, second)

        result = best.tour()
        if tracker:
            tracker.update(result.distance, "branch-and-bound")
        return result

    @staticmethod
    def _child(cache, branch, node):
        route = branch.route + [node]
        total = branch.total_distance + cache.distance(branch.route[-1], node)
        remaining = set(range(cache.num_points)).difference(route)
        return Branch(route, total, LowerBound.mst_weight(cache, sorted(remaining)))

    @staticmethod
    def _child_task(args):
        branch, node = args
        return BranchAndBound._child(_WORKER_CACHE, branch, node)

    @staticmethod
    def _expand(cache, branch, pool, expand_min):
        visited = set(branch.route)
        nodes = [node for node in range(cache.num_points) if node not in visited]
        if pool is not None and len(nodes) >= expand_min:
            return pool.map(BranchAndBound._child_task, [(branch, node) for node in nodes])
        return [BranchAndBound._child(cache, branch, node) for node in nodes]

    @staticmethod
    def _best_first_loop(cache, best, pool, expand_min, tracker):
        n = cache.num_points
        root = Branch([0], 0.0, LowerBound.mst_weight(cache, range(n)))
        counter = count()
        queue = [(root.priority, next(counter), root)]
        popped = 0

        while queue:
            priority, _, branch = heapq.heappop(queue)
            popped += 1

            # O limite pode ter caído depois da inserção
            if round_distance(priority) >= round_distance(best.bound()):
                continue

            if len(branch.route) == n:
                length = tour_length(cache, branch.route)[0]
                if best.offer(branch.route, length) and tracker:
                    tracker.update(length, "priority queue")
                continue

            children = BranchAndBound._expand(cache, branch, pool, expand_min)
            bound = round_distance(best.bound())
            for child in children:
                if round_distance(child.priority) < bound:
                    heapq.heappush(queue, (child.priority, next(counter), child))

        logger.info(f"Priority queue search expanded {popped} branches")

    @staticmethod
    def best_first(cache, initial=None, workers=1, tracker=None, expand_min=None):
        """Busca exata pela fila de prioridade custo + MST dos não visitados."""
        best = BranchAndBound._seeded(cache, initial)
        if expand_min is None:
            expand_min = CONFIG['exact']['parallel_expand_min']

        if workers > 1:
            with worker_pool(cache, workers) as pool:
                BranchAndBound._best_first_loop(cache, best, pool, expand_min, tracker)
        else:
            BranchAndBound._best_first_loop(cache, best, None, expand_min, tracker)

        return best.tour()

# ORQUESTRAÇÃO
@dataclass(frozen=True)
class LocalSearch:
    time_budget: float = 0.0

    @property
    def seconds(self):
        if isinstance(self.time_budget, timedelta):
            return self.time_budget.total_seconds()
        return float(self.time_budget)


@dataclass(frozen=True)
class ExactSearch:
    strategy: str = CONFIG['exact']['strategy']


EXACT_STRATEGIES = {
    'dfs': BranchAndBound.depth_first,
    'queue': BranchAndBound.best_first,
}


def _restart_loop(cache, best, deadline, pool, workers, rng, tracker):
    restarts = 0
    while time.time() < deadline:
        restarts += 1
        candidate = LocalOptimizer.two_opt(TourBuilder.random_tour(cache, rng), cache, pool, workers)

        if round_distance(candidate.distance) != round_distance(tour_length(cache, candidate.route)[0]):
            logger.warning("2-opt is returning tours with incorrect distances")

        if round_distance(candidate.distance) < round_distance(best.distance):
            best = candidate
            logger.info(f"Restart {restarts}: new best {best.distance:.4f}")
            if tracker:
                tracker.update(best.distance, f"restart {restarts}")

        if restarts % CONFIG['local']['restart_log_frequency'] == 0:
            logger.info(f"{restarts} restarts, best {best.distance:.4f}")

    logger.info(f"Local search finished after {restarts} restarts")
    return best


def solve(points, mode, workers=None, seed=None, tracker=None):
    start = time.time()
    point_set = points if isinstance(points, PointSet) else PointSet(points)
    workers = CONFIG['workers'] if workers is None else max(1, int(workers))
    n = len(point_set)

    if not isinstance(mode, (LocalSearch, ExactSearch)):
        raise ValueError(f"Modo desconhecido: {mode!r}")
    if isinstance(mode, ExactSearch) and mode.strategy not in EXACT_STRATEGIES:
        raise ValueError(f"Estratégia desconhecida: {mode.strategy!r}")

    cache = DistanceCache.build(point_set, workers)

    greedy = TourBuilder.greedy(cache)
    logger.info(f"Greedy tour length: {greedy.distance:.4f}")
    if tracker:
        tracker.update(greedy.distance, "greedy")

    use_pool = workers > 1 and n >= CONFIG['parallel_min_points']
    with (worker_pool(cache, workers) if use_pool else nullcontext()) as pool:
        best = LocalOptimizer.two_opt(greedy, cache, pool, workers, tracker, "2-opt greedy")
        logger.info(f"2-opt tour length: {best.distance:.4f}")

        if isinstance(mode, LocalSearch):
            deadline = start + mode.seconds
            best = _restart_loop(cache, best, deadline, pool, workers, random.Random(seed), tracker)

    if isinstance(mode, ExactSearch):
        if n > CONFIG['exact']['warn_above']:
            message = (f"Exact search on {n} points may not finish; "
                       f"practical limit is about {CONFIG['exact']['warn_above']}")
            logger.warning(message)
            warnings.warn(message, ExhaustedWarning, stacklevel=2)

        logger.info(f"Starting exact search ({mode.strategy}) from bound {best.distance:.4f}")
        search = EXACT_STRATEGIES[mode.strategy]
        best = search(cache, initial=best, workers=workers, tracker=tracker)
        logger.info(f"Exact search finished: {best.distance:.4f}")

    return Tour(list(best.route), best.distance)

# ENTRADA E SAÍDA
def load_points(filepath):
    with open(filepath, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return PointSet.from_dict(data)


def save_solution(tour, filepath):
    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(tour.to_dict(), f, indent=2)
    return filepath


def solution_filename(filepath, mode):
    suffix = "_local" if isinstance(mode, LocalSearch) else "_optimal"
    base = filepath[:-len(".json")] if filepath.endswith(".json") else filepath
    return base + suffix + "_solution.json"


def resolve_points_file(filepath):
    if os.path.exists(filepath):
        return filepath
    if os.path.exists(filepath + ".json"):
        return filepath + ".json"
    raise FileNotFoundError(f"Arquivo não encontrado: {filepath}")

# VISUALIZAÇÃO
def plot_solution(tour, points, tracker=None, filename="tsp_result.png"):
    # Rota final e histórico de melhorias
    fig = plt.figure(figsize=(16, 7))

    # Gráfico 1: Rota do TSP
    ax1 = plt.subplot(1, 2, 1)

    route = tour.route
    for i in range(len(route)):
        u, v = points[route[i]], points[route[(i + 1) % len(route)]]
        ax1.plot([u.x, v.x], [u.y, v.y], 'b-', linewidth=1, alpha=0.6)

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    ax1.scatter(xs, ys, c='blue', s=20, zorder=5)
    ax1.scatter([points[route[0]].x], [points[route[0]].y], c='red', s=40, zorder=6)

    ax1.set_title(f'Melhor rota encontrada: {tour.distance:.2f}', fontsize=14, fontweight='bold')
    ax1.set_xlabel('Coordenada X', fontsize=12)
    ax1.set_ylabel('Coordenada Y', fontsize=12)
    ax1.grid(True, alpha=0.3)
    ax1.set_aspect('equal')

    # Gráfico 2: Gap em relação à solução final
    ax2 = plt.subplot(1, 2, 2)

    gap_history = tracker.get_gap_history(tour.distance) if tracker else []
    if gap_history:
        iterations = [entry['iteration'] for entry in gap_history]
        gaps = [entry['gap'] for entry in gap_history]

        ax2.plot(iterations, gaps, 'g-', linewidth=2, label='Gap')
        ax2.axhline(y=1.0, color='r', linestyle='--', linewidth=1, alpha=0.7, label='1% Gap')
        ax2.set_yscale('log')
        ax2.set_title('Gap até a solução final', fontsize=14, fontweight='bold')
        ax2.set_xlabel('Iteração', fontsize=12)
        ax2.set_ylabel('Gap (%)', fontsize=12)
        ax2.legend(loc='upper right')
        ax2.grid(True, alpha=0.3, which='both')
    else:
        ax2.text(0.5, 0.5, 'Sem histórico disponível',
                 ha='center', va='center', transform=ax2.transAxes, fontsize=12)
        ax2.set_title('Gap até a solução final', fontsize=14, fontweight='bold')

    plt.tight_layout()
    plt.savefig(filename, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"\nGráfico salvo em: {filename}")
    return filename

# EXECUÇÃO PRINCIPAL
def build_parser():
    parser = argparse.ArgumentParser(prog='tsp', description="Caixeiro viajante euclidiano 2D")
    parser.add_argument('--workers', type=int, default=None, help='Processos do pool (padrão: núcleos - 1)')
    parser.add_argument('--seed', type=int, default=None)
    sub = parser.add_subparsers(dest='usage', required=True)

    gen = sub.add_parser('generate', aliases=['generate_problem'], help='Gera pontos aleatórios em JSON')
    gen.add_argument('count', type=int)
    gen.add_argument('--output', default=None)

    local = sub.add_parser('local', aliases=['solve_local'], help='2-opt com reinícios aleatórios')
    local.add_argument('file')
    local.add_argument('seconds', type=float, nargs='?', default=CONFIG['local']['default_time'])
    local.add_argument('--plot', action='store_true')

    optimal = sub.add_parser('optimal', aliases=['solve_optimal'], help='Branch and bound exato')
    optimal.add_argument('file')
    optimal.add_argument('--strategy', choices=sorted(EXACT_STRATEGIES), default=CONFIG['exact']['strategy'])
    optimal.add_argument('--plot', action='store_true')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.usage in ('generate', 'generate_problem'):
        if args.count < 2:
            print("Quantidade de pontos precisa ser pelo menos 2.")
            return 1
        gerar_arquivo_tsp(args.count, args.output, seed=args.seed)
        return 0

    if args.usage in ('local', 'solve_local'):
        mode = LocalSearch(args.seconds)
    else:
        mode = ExactSearch(args.strategy)

    start = time.time()
    try:
        filepath = resolve_points_file(args.file)
        points = load_points(filepath)
        tracker = ProgressTracker()
        best = solve(points, mode, workers=args.workers, seed=args.seed, tracker=tracker)
    except (InvalidInput, OSError, json.JSONDecodeError) as e:
        print(f"Erro: {e}")
        return 1

    elapsed = time.time() - start
    minutes, seconds = divmod(int(elapsed), 60)

    print(f"\n{'='*60}")
    print(f"Solução: {', '.join(str(i) for i in best.route)}")
    print(f"Distância: {best.distance:.4f}")
    print(f"Tempo de execução: {minutes:02d}:{seconds:02d}")
    for stage, info in tracker.stage_summary().items():
        print(f"  {stage:<20} {info['length']:.4f}  ({info['elapsed']:.2f}s)")
    print(f"{'='*60}")

    output = save_solution(best, solution_filename(filepath, mode))
    print(f"\nArquivo de saída gerado: {output}")

    if args.plot:
        plot_solution(best, points, tracker, os.path.splitext(output)[0] + ".png")
    return 0


if __name__ == "__main__":
    mp.freeze_support()
    sys.exit(main())
