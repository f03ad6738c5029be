# src/rf_chain_planner/plotting.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt

from .components import Amplifier
from .config_models import Requirements
from .optimizer import Configuration
from .validator import gain_profile


def plot_gain_profile(
    configuration: Configuration,
    requirements: Requirements,
    out_path: Optional[str | Path] = None,
) -> None:
    """
    Step plot of cumulative chain gain per stage.

    The required-gain threshold is drawn as a horizontal line and each
    amplifier's p1dB ceiling as a marker at its stage.
    """
    profile = np.concatenate([[0.0], gain_profile(configuration.components)])
    stages = np.arange(len(profile))

    plt.figure()
    plt.step(stages, profile, where="post", label="cumulative gain")
    plt.axhline(
        requirements.required_gain_db,
        linestyle="--",
        color="tab:green",
        label=f"required gain ({requirements.required_gain_db:g} dB)",
    )

    first = True
    for stage, comp in enumerate(configuration.components, start=1):
        if isinstance(comp, Amplifier):
            plt.plot(
                stage,
                comp.p1db_dbm,
                marker="v",
                color="tab:red",
                linestyle="none",
                label="amplifier p1dB" if first else "_p1db",
            )
            first = False

    labels = ["in"] + [c.kind.label for c in configuration.components]
    plt.xticks(stages, labels, rotation=20)
    plt.xlabel("Stage")
    plt.ylabel("Gain (dB)")
    plt.title("Signal-Chain Gain Profile")
    plt.legend()
    plt.grid(True)
    if out_path:
        out_path = Path(out_path)
        plt.savefig(out_path, dpi=150, bbox_inches="tight")
        plt.close()
    else:
        plt.show()
