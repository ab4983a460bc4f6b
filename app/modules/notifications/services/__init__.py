from .welcome_trigger_service import (
    IWelcomeTrigger,
    WelcomeTriggerService,
    spawn_welcome_trigger,
)

__all__ = ["IWelcomeTrigger", "WelcomeTriggerService", "spawn_welcome_trigger"]
