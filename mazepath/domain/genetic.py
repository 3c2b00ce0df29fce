"""Genetic path search with memetic path repair."""

import logging
import time
from dataclasses import dataclass, field, replace
from typing import List, Optional

from .types import Coord, GeneticConfig, Grid, MazeProblem, SolveResult, SolveStatus
from .fsm import EngineState, EngineStateMachine
from .individual import Individual
from .local_search import PathRepair
from .operators import crossover, mutate, random_walk, tournament_select
from .path import remove_loops
from ..utils.rng import SeededRNG

logger = logging.getLogger(__name__)


@dataclass
class EvolutionReport:
    """Outcome of one engine run."""
    best: Optional[Individual]
    generations: int
    best_cost_history: List[int] = field(default_factory=list)
    final_state: EngineState = EngineState.INIT
    evaluations: int = 0
    description: str = ""

    @property
    def success(self) -> bool:
        return self.best is not None and self.best.complete


class _EvolutionRun:
    """Mutable state of one evolve() call. Never shared between runs."""

    def __init__(self, config: GeneticConfig, grid: Grid, start: Coord, goal: Coord):
        self.config = config
        self.grid = grid
        self.start = start
        self.goal = goal
        self.rng = SeededRNG(config.seed)
        self.fsm = EngineStateMachine()
        self.repair = PathRepair(grid, config.repair_window, config.repair_max_expansions)
        self.step_limit = config.step_limit_for(grid)

        self.population: List[Individual] = []
        self.best: Optional[Individual] = None
        self.history: List[int] = []
        self.generation = 0
        self.stagnation = 0
        self.mutation_rate = config.mutation_rate
        self.evaluations = 0
        self.walks = 0
        self.goal_unreachable = False

        self.fsm.on_state_enter(EngineState.EVOLVING, self._on_evolving)
        for terminal in (EngineState.CONVERGED, EngineState.EXHAUSTED, EngineState.FAILED):
            self.fsm.on_state_enter(terminal, self._on_finished)

    def _on_evolving(self, context):
        logger.debug("Evolving from %d seed paths", context["seeds"])

    def _on_finished(self, context):
        logger.debug("%s at generation %d", self.fsm.get_state_description(), context["generation"])

    def evaluate(self, path) -> Individual:
        self.evaluations += 1
        return Individual.from_path(path, self.grid, self.goal)

    def walk(self) -> Optional[Individual]:
        self.walks += 1
        result = random_walk(self.grid, self.start, self.goal, self.rng,
                             goal_bias=self.config.goal_bias, max_steps=self.step_limit)
        if result.exhausted:
            self.goal_unreachable = True
        if result.path is None:
            return None
        return self.evaluate(result.path)

    def seed(self) -> List[Individual]:
        """
        Collect up to population_size complete random-walk paths.

        Stops at the first walk that exhausts the reachable region, since
        the goal then cannot be reached by any walk.
        """
        config = self.config
        seeds = []
        attempts = config.population_size * config.seed_attempts_per_individual
        for _ in range(attempts):
            seed = self.walk()
            if self.goal_unreachable:
                break
            if seed is not None:
                seeds.append(seed)
                if len(seeds) == config.population_size:
                    break
        return seeds

    def polish(self, individual: Individual) -> Individual:
        repaired = self.evaluate(self.repair.repair(individual.path))
        return repaired if repaired.cost < individual.cost else individual

    def record_generation(self):
        """Sort the population, track the best-ever individual and react to stagnation."""
        self.population.sort(key=lambda ind: ind.rank, reverse=True)
        leader = self.population[0]

        if self.best is None or leader.rank > self.best.rank:
            self.best = leader
            self.stagnation = 0
            self.mutation_rate = self.config.mutation_rate
        else:
            self.stagnation += 1
            if self.stagnation % self.config.stagnation_threshold == 0:
                self.respond_to_stagnation()

        self.history.append(self.best.cost)
        logger.debug("Generation %d: best cost %d, leader cost %d, stagnation %d, mutation %.3f",
                     self.generation, self.best.cost, leader.cost, self.stagnation, self.mutation_rate)

    def respond_to_stagnation(self):
        """Boost mutation and swap the weakest individuals for fresh walks."""
        config = self.config
        self.mutation_rate = min(config.max_mutation_rate, self.mutation_rate * config.mutation_boost)

        count = min(config.immigrant_count, len(self.population) - config.elite_count)
        replaced = 0
        for offset in range(1, count + 1):
            immigrant = self.walk()
            if immigrant is not None:
                self.population[-offset] = immigrant
                replaced += 1
        if count > 0:
            # Keep the population ordered for elite selection
            self.population.sort(key=lambda ind: ind.rank, reverse=True)

        logger.debug("Stagnant for %d generations: mutation rate %.3f, %d immigrants",
                     self.stagnation, self.mutation_rate, replaced)

    def breed(self):
        """Replace the population with elites plus offspring."""
        config = self.config
        elites = self.population[:config.elite_count]
        interval = config.elite_repair_interval
        if interval and self.generation > 0 and self.generation % interval == 0:
            elites[0] = self.polish(elites[0])

        offspring = list(elites)
        while len(offspring) < config.population_size:
            parent_a = tournament_select(self.population, config.tournament_size, self.rng)
            parent_b = tournament_select(self.population, config.tournament_size, self.rng)
            child = crossover(parent_a, parent_b, self.grid, self.goal, self.rng)
            if self.rng.chance(self.mutation_rate):
                child = mutate(child, self.grid, self.goal, self.rng, config.mutation_max_expansions)
            offspring.append(self.evaluate(remove_loops(child.path)))

        self.population = offspring

    def finish(self, state: EngineState) -> EvolutionReport:
        self.fsm.transition_to(state, {"generation": self.generation})
        best = self.best
        if best is not None and self.config.final_repair:
            best = self.polish(best)
        return EvolutionReport(best, self.generation, self.history, state, self.evaluations,
                               self.fsm.get_state_description())


class GeneticSolver:
    """
    Population-based path search.

    Seeds a population with randomized depth-first walks, then evolves it
    with tournament selection, single-cut crossover at shared cells,
    segment re-routing mutation and elitism. Stagnation raises the mutation
    rate and brings in fresh walks. With repair enabled the best paths are
    polished by PathRepair, which makes the search memetic.
    """

    def __init__(self, config: Optional[GeneticConfig] = None, name: str = "Memetic"):
        self.config = config or GeneticConfig()
        self.name = name

    def evolve(self, problem: MazeProblem) -> EvolutionReport:
        """Run the engine to a terminal state and report what happened."""
        return self._evolve(problem.grid, problem.start, problem.goal)

    def _evolve(self, grid: Grid, start: Coord, goal: Coord) -> EvolutionReport:
        config = self.config
        run = _EvolutionRun(config, grid, start, goal)

        seeds = run.seed()
        if run.goal_unreachable:
            logger.info("%s: goal unreachable from start after %d walks", self.name, run.walks)
            return run.finish(EngineState.FAILED)
        if len(seeds) < config.min_valid_seeds:
            logger.info("%s: only %d valid seed paths (need %d), giving up",
                        self.name, len(seeds), config.min_valid_seeds)
            return run.finish(EngineState.FAILED)

        run.population = [seeds[i % len(seeds)] for i in range(config.population_size)]
        run.fsm.transition_to(EngineState.EVOLVING, {"seeds": len(seeds)})

        while True:
            run.record_generation()
            if run.best.complete and run.stagnation >= config.convergence_threshold:
                state = EngineState.CONVERGED
                break
            if run.generation >= config.max_generations:
                state = EngineState.EXHAUSTED
                break
            run.breed()
            run.generation += 1

        report = run.finish(state)
        logger.info("%s %s after %d generations: best cost %d, %d evaluations",
                    self.name, state.value, report.generations, report.best.cost, report.evaluations)
        return report

    def solve(self, grid: Grid, start: Coord, goal: Coord) -> SolveResult:
        """
        Evolve a path from start to goal.

        Returns a Failed result when seeding fails or no complete path
        survives; nodes_expanded counts evaluated individuals.
        """
        started = time.perf_counter()
        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))

        if start == goal:
            return SolveResult.trivial(start, self.name)

        report = self._evolve(grid, start, goal)
        elapsed = time.perf_counter() - started
        if not report.success:
            return SolveResult.failed(elapsed, report.evaluations, self.name)

        return SolveResult(
            status=SolveStatus.SUCCESS,
            path=report.best.path,
            cost=report.best.cost,
            elapsed=elapsed,
            nodes_expanded=report.evaluations,
            algorithm=self.name,
        )

    def solve_problem(self, problem: MazeProblem) -> SolveResult:
        """Solve a MazeProblem value."""
        return self.solve(problem.grid, problem.start, problem.goal)


def memetic_solver(seed: Optional[int] = None, config: Optional[GeneticConfig] = None) -> GeneticSolver:
    """Genetic search with periodic elite polish and a final repair."""
    config = replace(config or GeneticConfig(), seed=seed)
    return GeneticSolver(config, name="Memetic")


def genetic_solver(seed: Optional[int] = None, config: Optional[GeneticConfig] = None) -> GeneticSolver:
    """Plain genetic search without path repair."""
    config = replace(config or GeneticConfig(), seed=seed, elite_repair_interval=0, final_repair=False)
    return GeneticSolver(config, name="Genetic")
