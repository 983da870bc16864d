"""Wrappers around the external ``helix`` command.

The tutorial asks learners to initialise, check and redeploy their instance
with the helix CLI. These helpers run it and classify the result.
"""

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from helixir.config import HelixirConfig
from helixir.errors import HelixCommandError

HELIX_BINARY = "helix"


@dataclass(frozen=True)
class RedeployResult:
    ok: bool
    message: str


def _run_helix(
    args: list[str], cwd: Optional[Union[str, Path]] = None
) -> subprocess.CompletedProcess:
    if shutil.which(HELIX_BINARY) is None:
        raise HelixCommandError(
            "Could not run 'helix'. Make sure HelixDB is installed and on your PATH."
        )
    logger.debug(f"Running: {HELIX_BINARY} {' '.join(args)}")
    return subprocess.run(
        [HELIX_BINARY, *args],
        capture_output=True,
        text=True,
        cwd=cwd,
    )


def is_helix_initialized(config: HelixirConfig) -> bool:
    """True once ``helix init`` has created the config directory."""
    return config.config_dir.is_dir()


def run_helix_check(cwd: Optional[Union[str, Path]] = None) -> bool:
    """Run ``helix check`` and report whether it succeeded."""
    result = _run_helix(["check"], cwd=cwd)
    if result.returncode != 0:
        logger.info(f"helix check failed: {result.stderr.strip() or result.stdout.strip()}")
    return result.returncode == 0


def redeploy_instance(instance_id: str, cwd: Optional[Union[str, Path]] = None) -> RedeployResult:
    """Run ``helix redeploy <instance_id>`` and classify the output."""
    result = _run_helix(["redeploy", instance_id], cwd=cwd)
    output = f"{result.stdout}\n{result.stderr}"

    if "No Helix instance found" in output:
        return RedeployResult(
            ok=False,
            message=f"Invalid instance ID '{instance_id}'. "
            "Run 'helix instances' to get your correct instance ID.",
        )
    if "Parse error" in output:
        return RedeployResult(
            ok=False, message="Deployment failed due to parse errors in queries.hx"
        )
    if "Error compiling" in output:
        return RedeployResult(ok=False, message="Deployment failed due to compilation errors")
    if result.returncode != 0:
        return RedeployResult(ok=False, message="Failed to redeploy instance")

    return RedeployResult(ok=True, message="Redeployed instance successfully")
