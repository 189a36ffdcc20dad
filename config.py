# config.py

# ----------------------------
# Sampling & Simulation
# ----------------------------

SAMPLING_TIME = 0.01                 # Controller sampling period (s)
SIMULATION_TIME = 10.0               # Default length of a simulated run (s)
PLANT_TIME_CONSTANT = 1.0            # First-order plant time constant (s)
PLANT_GAIN = 1.0                     # First-order plant static gain


# ----------------------------
# Default Controller Tuning
# ----------------------------

KP = 1.0                             # Proportional gain
KI = 0.0                             # Integral gain
KD = 0.0                             # Derivative gain
TAU = 0.02                           # Derivative low-pass time constant (s)
SETPOINT = 5.0                       # Initial target value


# ----------------------------
# Bounds
# ----------------------------

INTEGRAL_LIMIT = 50.0                # Symmetric integral bound used by the tuning page
OUTPUT_LIMIT = 100.0                 # Symmetric output bound (actuator saturation)


# ----------------------------
# Tuning Page Slider Ranges (min, max, step)
# ----------------------------

KP_RANGE = (0.0, 10.0, 0.1)
KI_RANGE = (0.0, 5.0, 0.05)
KD_RANGE = (0.0, 5.0, 0.05)
TAU_RANGE = (0.0, 1.0, 0.01)
SETPOINT_RANGE = (0.0, 10.0, 0.1)
SIMULATION_TIME_RANGE = (2.0, 20.0, 1.0)
LIMIT_RANGE = (1.0, 200.0, 1.0)


# ----------------------------
# Logging
# ----------------------------

LOG_FILE = None                      # Path of the log file; None logs to stderr
LOG_LEVEL = "INFO"
