"""Seed demo habits and print an analytics report.

Usage:
    flask demo-report              # random demo data
    flask demo-report --seed 42    # reproducible demo data
"""

from __future__ import annotations

import math
import random
from datetime import date, timedelta
from typing import List, Optional, Tuple

import click
from flask import current_app
from flask.cli import with_appcontext

from habitkit.domains.habits.models import Account
from habitkit.domains.habits.services import HabitRegistry

DEMO_DAYS = 30

DEMO_HABITS = [
    {"name": "Drink Water", "icon": "💧", "goal": 8, "unit": "glasses", "category": "health", "color": "#3B82F6", "consistency": 0.85},
    {"name": "Sleep", "icon": "😴", "goal": 8, "unit": "hours", "category": "health", "color": "#8B5CF6", "consistency": 0.75},
    {"name": "Deep Work", "icon": "💻", "goal": 2, "unit": "hours", "category": "productivity", "color": "#10B981", "consistency": 0.7},
    {"name": "Meditation", "icon": "🧘", "goal": 20, "unit": "minutes", "category": "self-care", "color": "#F59E0B", "consistency": 0.6},
    {"name": "Reading", "icon": "📚", "goal": 30, "unit": "minutes", "category": "self-care", "color": "#EC4899", "consistency": 0.8},
    {"name": "Exercise", "icon": "🏃", "goal": 45, "unit": "minutes", "category": "fitness", "color": "#EF4444", "consistency": 0.65},
]


def generate_mock_entries(
    goal: float, today: date, rng: random.Random, consistency: float = 0.8, days: int = DEMO_DAYS
) -> List[Tuple[date, int]]:
    """Realistic values for the last ``days`` days, oldest first.

    A day hits the goal with probability ``consistency``; hits land between
    70% and 130% of goal, misses between 0 and 60%.
    """
    entries = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        if rng.random() < consistency:
            value = rng.randint(math.floor(goal * 0.7), int(goal) + math.floor(goal * 0.3))
        else:
            value = rng.randint(0, math.floor(goal * 0.6))
        entries.append((day, value))
    return entries


def seed_demo_habits(registry: HabitRegistry, seed: Optional[int] = None) -> list:
    rng = random.Random(seed)
    today = registry.today()
    created = []
    for demo in DEMO_HABITS:
        consistency = demo["consistency"]
        fields = {k: v for k, v in demo.items() if k != "consistency"}
        fields["entries"] = [
            {"logged_date": day, "value": value}
            for day, value in generate_mock_entries(demo["goal"], today, rng, consistency)
        ]
        created.append(registry.create(fields))
    return created


@click.command("demo-report")
@click.option("--seed", "-s", type=int, default=None, help="Random seed for reproducible data")
@with_appcontext
def demo_report_command(seed: Optional[int]):
    """Seed a fresh registry with demo habits and print the analytics overview."""
    insights = current_app.extensions["insights_engine"]
    clock = current_app.extensions["clock"]
    registry = HabitRegistry(
        clock=clock,
        account=Account(name=current_app.config["ACCOUNT_NAME"], join_date=clock.today()),
        lookback=current_app.config["STREAK_LOOKBACK_DAYS"],
    )
    seed_demo_habits(registry, seed=seed)
    report = registry.report()

    click.echo(f"Report for {registry.account.name} on {report.today.isoformat()}: {len(report.rates)} habits")
    click.echo(f"  Overall completion: {report.overall_completion}% ({report.band})")
    click.echo(f"  Account streak: {report.account.current_streak} days")
    for rate in report.rates:
        click.echo(f"  {rate.icon} {rate.name}: {rate.rate}% this week, {rate.current_streak} day streak")
    click.echo("Categories: " + ", ".join(f"{k}={v}" for k, v in report.categories.items()))
    for insight in insights.summarize(report):
        click.echo(f"- [{insight['type']}] {insight['message']}")


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(demo_report_command)
