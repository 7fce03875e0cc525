"""Day-boundary scheduler package."""
from drinkwater.scheduler.day_rollover import (
    create_scheduler,
    day_boundary,
    run_day_boundary_check,
    run_startup_catch_up,
)

__all__ = ["create_scheduler", "day_boundary", "run_day_boundary_check", "run_startup_catch_up"]
