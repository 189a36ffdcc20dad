# plant.py

"""
Closed-loop simulation harness.

A first-order plant stands in for the process; `simulate` drives a
controller against it once per sample, the same way an embedded control
loop would.
"""

import logging
from collections import namedtuple

import numpy as np

from config import PLANT_GAIN, PLANT_TIME_CONSTANT
from pid_core import ConfigurationError

logger = logging.getLogger(__name__)


SimulationResult = namedtuple(
    "SimulationResult",
    ["time", "setpoint", "measurement", "control", "error", "integral"],
)


class FirstOrderPlant:
    """x' = (-x + gain * u) / time_constant, integrated with explicit Euler."""

    def __init__(self, time_constant=PLANT_TIME_CONSTANT, gain=PLANT_GAIN, initial=0.0):
        if not time_constant > 0:
            raise ConfigurationError(f"Plant time constant must be positive, got {time_constant}")
        self.time_constant = time_constant
        self.gain = gain
        self.initial = initial
        self.value = initial

    def advance(self, u, dt):
        self.value += (-self.value + self.gain * u) * dt / self.time_constant
        return self.value

    def reset(self):
        self.value = self.initial


def _schedule(source, steps, time, default):
    """Expand a scalar, per-sample sequence or callable of time into an array."""
    if source is None:
        return np.full(steps, default, dtype=float)
    if callable(source):
        return np.array([source(t) for t in time], dtype=float)
    values = np.asarray(source, dtype=float)
    if values.ndim == 0:
        return np.full(steps, float(values))
    if values.shape != (steps,):
        raise ValueError(f"Schedule must have {steps} entries, got {values.shape[0]}")
    return values


def simulate(controller, plant, steps, dt, setpoints=None, disturbance=None):
    """
    Run `steps` samples of the closed loop and return a SimulationResult.

    setpoints: optional per-sample target (sequence or callable of time);
        assigned to `controller.setpoint` before each step.
    disturbance: optional additive input disturbance (scalar, sequence or
        callable of time) applied to the control signal before the plant.
    """
    if steps <= 0:
        raise ValueError(f"steps must be positive, got {steps}")

    time = np.arange(steps) * dt
    targets = _schedule(setpoints, steps, time, float(controller.setpoint))
    disturbances = _schedule(disturbance, steps, time, 0.0)

    measurement = np.empty(steps)
    control = np.empty(steps)
    error = np.empty(steps)
    integral = np.empty(steps)

    for k in range(steps):
        if setpoints is not None:
            controller.setpoint = targets[k]
        x = plant.value
        u = controller.step(x)

        measurement[k] = x
        control[k] = u
        error[k] = targets[k] - x
        integral[k] = controller.integral

        plant.advance(float(u) + disturbances[k], dt)

    logger.info("Simulated %d steps, final error %.4f", steps, error[-1])

    return SimulationResult(time, targets, measurement, control, error, integral)
