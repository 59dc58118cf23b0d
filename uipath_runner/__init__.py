"""UiPath Orchestrator job runner: option resolution and start-and-await job execution."""
