"""Greedy list scheduler for epics and stories over a developer pool."""

from __future__ import annotations

import math

from sprintcast.business_days import business_day_diff
from sprintcast.graph import GraphItem, WorkGraph
from sprintcast.logger import changes_enabled, checks_enabled, debug_enabled, get_logger
from sprintcast.models import Plan
from sprintcast.resources import Team

from .config import SchedulingConfig, VelocityConfig
from .core import Assignment, DeveloperTimeline, Placement, ScheduleResult, SchedulingContext

logger = get_logger()


class GreedyScheduler:
    """Dependency-aware greedy list scheduling.

    Each pass of the main loop:
    1. Recomputes the ready set (stories whose dependencies are all finished)
    2. Orders it by points, largest first, keeping plan order for ties
    3. Places the first story that has a candidate developer, at that
       developer's earliest feasible start
    4. Stops when nothing is ready or nothing could be placed

    Bundle tags bind stories to one developer: the developer chosen for the
    first story of a bundle takes every later story with the same tag.
    """

    def __init__(
        self,
        plan: Plan,
        team: Team | None = None,
        velocity: float | None = None,
        *,
        config: SchedulingConfig | None = None,
    ):
        """Initialize the scheduler.

        Args:
            plan: Plan to schedule (read, never modified)
            team: Developer pool; an empty or missing team schedules on one
                default developer
            velocity: Points per developer per sprint
            config: Optional scheduling configuration
        """
        self.plan = plan
        self.team = team if team is not None else Team()
        self.config = config or SchedulingConfig()
        self.velocity = VelocityConfig.resolve(velocity, self.config)
        self.graph = WorkGraph.from_plan(plan)
        self.developers = self.team.effective_developers()

    def schedule(self) -> ScheduleResult:
        """Run the scheduler.

        Returns:
            ScheduleResult with assignments in placement order
        """
        context = self._create_context()

        while context.pending > 0 and context.iterations < self.config.max_iterations:
            context.iterations += 1

            ready = self._ready_items(context)
            if not ready:
                logger.changes(f"No ready stories with {context.pending} pending; stopping")
                break

            # sorted() is stable, so equal points keep plan order
            ready = sorted(ready, key=lambda item: -item.points)

            if not self._place_first(ready, context):
                logger.changes(f"No story could be placed ({context.pending} pending); stopping")
                break

        if context.pending > 0 and context.iterations >= self.config.max_iterations:
            logger.changes(f"Iteration limit {self.config.max_iterations} reached")

        return context.to_result()

    def _create_context(self) -> SchedulingContext:
        """Build the per-run state; stories already done finish at offset 0."""
        daily = self.velocity.daily_velocity
        context = SchedulingContext(
            timelines=[
                DeveloperTimeline(
                    index=index,
                    developer=developer,
                    adjusted_velocity=daily * (developer.capacity / 100),
                )
                for index, developer in enumerate(self.developers)
            ]
        )
        for item in self.graph:
            if self.graph.is_effectively_done(item.id):
                context.done.add(item.id)
                context.completion_times[item.id] = 0.0
            else:
                context.pending += 1
        if debug_enabled():
            logger.debug(
                f"Scheduling {context.pending} stories on {len(context.timelines)} developers "
                f"at {daily:.3f} pts/day"
            )
        return context

    def _ready_items(self, context: SchedulingContext) -> list[GraphItem]:
        """Stories that can be placed this pass, in plan order."""
        ready = [item for item in self.graph if self.graph.is_ready(item.id, context.done)]
        if checks_enabled():
            logger.checks(f"Pass {context.iterations}: ready={[item.id for item in ready]}")
        return ready

    def _place_first(self, ready: list[GraphItem], context: SchedulingContext) -> bool:
        """Place the first ready story that has a candidate developer."""
        for item in ready:
            placement = self._find_placement(item, context)
            if placement is None:
                if checks_enabled():
                    logger.checks(f"  {item.id}: no candidate developer, skipping")
                continue
            self._commit(item, placement, context)
            return True
        return False

    def _candidate_indices(self, item: GraphItem, context: SchedulingContext) -> list[int]:
        """Developers allowed to take a story.

        Locked bundle developer, else the developer named by the bundle tag,
        else every unrestricted developer.
        """
        bundle = item.story.bundle
        if bundle:
            if bundle in context.bundle_locks:
                return [context.bundle_locks[bundle]]
            named = self.team.find_developer(bundle)
            if named is not None:
                return [named]
        return self.team.unrestricted_indices()

    def _dependency_constraint(self, item: GraphItem, context: SchedulingContext) -> float:
        """Latest completion among the story's own and epic-level blockers."""
        constraint = 0.0
        for blocking_id in self.graph.blocking_story_ids(item.id):
            if blocking_id in context.completion_times:
                constraint = max(constraint, context.completion_times[blocking_id])
        return constraint

    def _blocked_until_offset(self, item: GraphItem) -> float:
        """Working-day offset of the story's blocked-until date (0 if none)."""
        blocked_until = item.story.blocked_until
        if blocked_until is None or self.plan.start_date is None:
            return 0.0
        return float(max(0, business_day_diff(self.plan.start_date, blocked_until)))

    def _find_placement(self, item: GraphItem, context: SchedulingContext) -> Placement | None:
        """Choose the candidate with the earliest feasible start.

        Strict comparison: the first candidate in team order wins ties.
        """
        constraint = max(
            self._dependency_constraint(item, context), self._blocked_until_offset(item)
        )
        best: Placement | None = None
        for index in self._candidate_indices(item, context):
            timeline = context.timelines[index]
            start = max(timeline.next_free, constraint)
            if debug_enabled():
                logger.debug(f"    {item.id} on {timeline.name}: earliest start {start:.2f}")
            if best is None or start < best.earliest_start:
                best = Placement(developer_index=index, earliest_start=start)
        return best

    def _aligned_start(self, start: float, points: float, duration: float) -> float:
        """Move a small story to the next sprint boundary if it would straddle one.

        Only stories worth at most one developer-sprint of points are moved.
        """
        if points > self.velocity.points_per_developer_per_sprint:
            return start
        sprint_days = self.velocity.working_days_per_sprint
        sprint_end = (math.floor(start / sprint_days) + 1) * sprint_days
        if start + duration > sprint_end:
            return float(sprint_end)
        return start

    def _commit(self, item: GraphItem, placement: Placement, context: SchedulingContext) -> None:
        """Record a placement and advance the developer's timeline."""
        timeline = context.timelines[placement.developer_index]
        story = item.story

        if story.bundle and story.bundle not in context.bundle_locks:
            context.bundle_locks[story.bundle] = placement.developer_index
            logger.changes(f"Bundle '{story.bundle}' locked to {timeline.name}")

        velocity = max(self.config.min_velocity, timeline.adjusted_velocity)
        duration = story.points / velocity
        start = self._aligned_start(placement.earliest_start, story.points, duration)
        finish = start + duration
        completion = start + max(duration, story.min_days)

        timeline.next_free = finish
        context.done.add(story.id)
        context.completion_times[story.id] = completion
        context.pending -= 1
        context.max_completion = max(context.max_completion, completion)
        context.assignments.append(
            Assignment(
                story_id=story.id,
                story_name=story.name,
                epic_id=item.epic_id,
                epic_name=item.epic_name,
                developer_index=placement.developer_index,
                developer_name=timeline.name,
                start=start,
                finish=finish,
                completion=completion,
                points=story.points,
            )
        )
        if changes_enabled():
            logger.changes(
                f"{story.id} -> {timeline.name}: start={start:.2f} finish={finish:.2f} "
                f"complete={completion:.2f} ({story.points:g} pts)"
            )


def calculate_schedule(
    plan: Plan,
    team: Team | None = None,
    velocity: float | None = None,
    config: SchedulingConfig | None = None,
) -> ScheduleResult:
    """Schedule a plan's remaining stories on a team.

    Pure with respect to its inputs: every call builds fresh state.
    """
    return GreedyScheduler(plan, team, velocity, config=config).schedule()
