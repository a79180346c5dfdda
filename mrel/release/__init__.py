"""Release bounded context.

Domain types shared by the services and the CLI:
- version: ReleaseVersion and its validation
- model: steps, step results, stages and the run state
- errors: error payloads rendered by the output layer

Nothing here imports services, typer or rich.
"""

from __future__ import annotations
