# pid_core.py

import logging

import numpy as np

logger = logging.getLogger(__name__)

# Degenerate configurations are allowed to produce inf/nan without warnings.
_PERMISSIVE = dict(divide="ignore", invalid="ignore", over="ignore")


class ConfigurationError(ValueError):
    """Raised when a controller is given an inconsistent configuration."""


def clamp(value, value_min, value_max):
    """Limit `value` to [value_min, value_max].

    NaN fails both comparisons and comes back unchanged.
    """
    if value < value_min:
        return value_min
    if value > value_max:
        return value_max
    return value


def _float_type(dtype):
    try:
        resolved = np.dtype(dtype)
    except TypeError as exc:
        raise ConfigurationError(f"Unsupported dtype: {dtype!r}") from exc
    if not np.issubdtype(resolved, np.floating):
        raise ConfigurationError(f"Controller dtype must be a floating type, got {resolved}")
    return resolved.type


class Controller:
    """Discrete-time PID controller with a filtered derivative on measurement.

    kp, ki, kd: proportional, integral and derivative gains.
    tau: time constant of the derivative low-pass filter.
    sampling_time: seconds between two consecutive calls to `step`.
    setpoint: initial target value.
    dtype: numpy floating type used for every coefficient and all state.
    strict: reject non-finite arguments, a non-positive sampling time and
        2 * tau + sampling_time == 0 instead of letting NaN/inf propagate.

    `step` must be called exactly once per sampling period, in order.
    A single instance is not safe to share between threads.
    """

    def __init__(self, kp, ki, kd, tau, sampling_time, setpoint,
                 dtype=np.float64, strict=False):
        self._type = _float_type(dtype)
        cast = self._type

        with np.errstate(**_PERMISSIVE):
            kp, ki, kd = cast(kp), cast(ki), cast(kd)
            tau, sampling_time = cast(tau), cast(sampling_time)
            setpoint = cast(setpoint)

        if strict:
            self._check(kp, ki, kd, tau, sampling_time, setpoint)

        two = cast(2.0)
        half = cast(0.5)

        self._setpoint = setpoint

        self._error = cast(0.0)
        self._integral = cast(0.0)
        self._derivative = cast(0.0)
        self._measurement = cast(0.0)

        with np.errstate(**_PERMISSIVE):
            self._kp = kp
            self._ki = half * ki * sampling_time
            self._kd = -two * kd
            self._tc = (two * tau - sampling_time) / (two * tau + sampling_time)

        self._imin = cast(-np.inf)
        self._imax = cast(np.inf)

        self._omin = cast(-np.inf)
        self._omax = cast(np.inf)

        logger.debug(
            "Controller created: kp=%s ki=%s kd=%s tau=%s ts=%s dtype=%s",
            kp, ki, kd, tau, sampling_time, np.dtype(cast).name,
        )

    @staticmethod
    def _check(kp, ki, kd, tau, sampling_time, setpoint):
        named = {
            "kp": kp, "ki": ki, "kd": kd, "tau": tau,
            "sampling_time": sampling_time, "setpoint": setpoint,
        }
        for name, value in named.items():
            if not np.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value}")
        if sampling_time <= 0:
            raise ConfigurationError(f"sampling_time must be positive, got {sampling_time}")
        with np.errstate(**_PERMISSIVE):
            denominator = 2 * tau + sampling_time
        if denominator == 0:
            raise ConfigurationError(
                f"2 * tau + sampling_time must be non-zero (tau={tau}, sampling_time={sampling_time})"
            )

    @property
    def dtype(self):
        return np.dtype(self._type)

    @property
    def setpoint(self):
        return self._setpoint

    @setpoint.setter
    def setpoint(self, value):
        with np.errstate(**_PERMISSIVE):
            self._setpoint = self._type(value)

    @property
    def gain_p(self):
        return self._kp

    @property
    def gain_i(self):
        return self._ki

    @property
    def gain_d(self):
        return self._kd

    @property
    def filter_coeff(self):
        return self._tc

    @property
    def integral(self):
        return self._integral

    @property
    def derivative(self):
        return self._derivative

    @property
    def previous_error(self):
        return self._error

    @property
    def previous_measurement(self):
        return self._measurement

    @property
    def integral_bounds(self):
        return self._imin, self._imax

    @property
    def output_bounds(self):
        return self._omin, self._omax

    def _bounds(self, kind, value_min, value_max):
        # Finite values beyond the range of a narrow dtype become +-inf.
        with np.errstate(**_PERMISSIVE):
            lo, hi = self._type(value_min), self._type(value_max)
        if not lo <= hi:
            raise ConfigurationError(f"{kind} bounds require min <= max, got ({lo}, {hi})")
        logger.debug("%s bounds set to (%s, %s)", kind, lo, hi)
        return lo, hi

    def bound_integral(self, value_min, value_max):
        """Restrict the integral accumulator to [value_min, value_max] (anti-windup)."""
        self._imin, self._imax = self._bounds("integral", value_min, value_max)
        return self

    def bound_output(self, value_min, value_max):
        """Restrict the controller output to [value_min, value_max]."""
        self._omin, self._omax = self._bounds("output", value_min, value_max)
        return self

    def step(self, measurement):
        """Advance the controller by one sample and return the clamped output."""
        with np.errstate(**_PERMISSIVE):
            measurement = self._type(measurement)
            error = self._setpoint - measurement

            proportional = self._kp * error
            # Trapezoidal integral, clamped after accumulation to prevent windup.
            integral = self._ki * (error + self._error) + self._integral
            self._integral = clamp(integral, self._imin, self._imax)
            # Derivative on measurement so a setpoint change causes no kick.
            self._derivative = self._kd * (measurement - self._measurement) + self._tc * self._derivative

            self._error = error
            self._measurement = measurement

            output = proportional + self._integral + self._derivative
        return clamp(output, self._omin, self._omax)

    update = step

    def reset(self):
        """Zero the recurrence state. Gains, bounds and setpoint are kept."""
        zero = self._type(0.0)
        self._error = zero
        self._integral = zero
        self._derivative = zero
        self._measurement = zero
        logger.debug("Controller state reset")
        return self

    def __repr__(self):
        return (
            f"Controller(gain_p={self._kp}, gain_i={self._ki}, gain_d={self._kd}, "
            f"filter_coeff={self._tc}, setpoint={self._setpoint}, dtype={self.dtype.name})"
        )
