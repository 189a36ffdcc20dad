import logging
import traceback

import matplotlib.pyplot as plt
import streamlit as st

import config
from logging_config import setup_logger

# ==============================
# STREAMLIT PAGE SETUP
# ==============================
st.set_page_config(
    page_title="PID Controller",
    layout="wide"
)

st.title("PID Controller")
st.write("Interactive tuning of a discrete-time PID controller against a first-order plant")

log_level = getattr(logging, config.LOG_LEVEL)
setup_logger("pid_core", config.LOG_FILE, log_level)
logger = setup_logger("plant", config.LOG_FILE, log_level)

# ==============================
# SAFE IMPORT OF PID CONTROLLER
# ==============================
try:
    from pid_core import ConfigurationError, Controller
    from plant import FirstOrderPlant, simulate
except Exception as e:
    st.error("❌ Failed to import PID controller from `pid_core.py`")
    st.code(traceback.format_exc())
    st.stop()

# ==============================
# SIDEBAR CONTROLS
# ==============================
st.sidebar.header("PID Parameters")

kp = st.sidebar.slider("Kp (Proportional)", *config.KP_RANGE[:2], config.KP, config.KP_RANGE[2])
ki = st.sidebar.slider("Ki (Integral)", *config.KI_RANGE[:2], config.KI, config.KI_RANGE[2])
kd = st.sidebar.slider("Kd (Derivative)", *config.KD_RANGE[:2], config.KD, config.KD_RANGE[2])
tau = st.sidebar.slider("τ (Derivative filter)", *config.TAU_RANGE[:2], config.TAU, config.TAU_RANGE[2])

st.sidebar.divider()

setpoint = st.sidebar.slider("Setpoint", *config.SETPOINT_RANGE[:2], config.SETPOINT, config.SETPOINT_RANGE[2])
simulation_time = st.sidebar.slider(
    "Simulation Time (s)", *config.SIMULATION_TIME_RANGE[:2],
    config.SIMULATION_TIME, config.SIMULATION_TIME_RANGE[2]
)

st.sidebar.divider()

st.sidebar.header("Bounds")
integral_limit = st.sidebar.slider(
    "Integral limit (±)", *config.LIMIT_RANGE[:2], config.INTEGRAL_LIMIT, config.LIMIT_RANGE[2]
)
output_limit = st.sidebar.slider(
    "Output limit (±)", *config.LIMIT_RANGE[:2], config.OUTPUT_LIMIT, config.LIMIT_RANGE[2]
)

# ==============================
# BUILD CONTROLLER
# ==============================
# Gains are fixed at construction, so every rerun builds a fresh controller.
dt = config.SAMPLING_TIME
steps = int(round(simulation_time / dt))

try:
    pid = Controller(kp, ki, kd, tau, dt, setpoint, strict=True)
    pid.bound_integral(-integral_limit, integral_limit).bound_output(-output_limit, output_limit)
except ConfigurationError as e:
    st.error(f"❌ Invalid controller configuration: {e}")
    st.stop()

plant = FirstOrderPlant()

# ==============================
# RUN SIMULATION (WITH SAFETY)
# ==============================
try:
    result = simulate(pid, plant, steps, dt)
except Exception as e:
    logger.exception("PID simulation failed")
    st.error("❌ Error occurred during PID simulation")
    st.code(traceback.format_exc())
    st.stop()

# ==============================
# PLOTS
# ==============================
col1, col2 = st.columns(2)

with col1:
    st.subheader("System Output")

    fig1, ax1 = plt.subplots()
    ax1.plot(result.time, result.measurement, label="Output")
    ax1.plot(result.time, result.setpoint, "--", label="Setpoint")
    ax1.set_xlabel("Time (s)")
    ax1.set_ylabel("Value")
    ax1.legend()
    ax1.grid(True)

    st.pyplot(fig1)

with col2:
    st.subheader("Control Signal")

    fig2, ax2 = plt.subplots()
    ax2.plot(result.time, result.control, label="Control Output (u)")
    ax2.axhline(output_limit, color="gray", linestyle=":")
    ax2.axhline(-output_limit, color="gray", linestyle=":")
    ax2.set_xlabel("Time (s)")
    ax2.set_ylabel("Control Effort")
    ax2.grid(True)

    st.pyplot(fig2)

col3, col4 = st.columns(2)

with col3:
    st.subheader("Tracking Error")

    fig3, ax3 = plt.subplots()
    ax3.plot(result.time, result.error, label="Error (Setpoint − Output)")
    ax3.set_xlabel("Time (s)")
    ax3.set_ylabel("Error")
    ax3.grid(True)

    st.pyplot(fig3)

with col4:
    st.subheader("Integral State")

    fig4, ax4 = plt.subplots()
    ax4.plot(result.time, result.integral, label="Integral")
    ax4.axhline(integral_limit, color="gray", linestyle=":")
    ax4.axhline(-integral_limit, color="gray", linestyle=":")
    ax4.set_xlabel("Time (s)")
    ax4.set_ylabel("Integral")
    ax4.grid(True)

    st.pyplot(fig4)

# ==============================
# DEBUG / INTERNAL PID STATE
# ==============================
with st.expander("🛠 Debug / Internal PID State"):
    st.write("Derived Gains")
    st.json({
        "gain_p": float(pid.gain_p),
        "gain_i": float(pid.gain_i),
        "gain_d": float(pid.gain_d),
        "filter_coeff": float(pid.filter_coeff),
    })

    st.write(f"Integral Term: `{pid.integral}`")
    st.write(f"Derivative Term: `{pid.derivative}`")
    st.write(f"Previous Error: `{pid.previous_error}`")

    st.write(f"Final Output Value: `{result.measurement[-1]}`")
    st.write(f"Final Error: `{result.error[-1]}`")

# ==============================
# TUNING HELP
# ==============================
st.markdown("""
### PID Tuning Notes
- **Kp**: Increases responsiveness, too high → oscillations
- **Ki**: Eliminates steady-state error, bounded by the integral limit to avoid windup
- **Kd**: Dampens oscillations; acts on the measurement, so setpoint jumps cause no kick
- **τ**: Filters the derivative, larger values smooth noise but add lag

💡 Use the **error plot** to judge tuning quality.
""")
