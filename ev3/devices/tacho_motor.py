"""Tacho motors (``tacho-motor`` device class).

Every accessor maps to exactly one attribute of the motor directory. Speeds
are in tacho counts per second, positions in tacho counts, times in
milliseconds, as reported by the kernel driver.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from ..driver.events import wait as wait_for
from ..errors import Ev3Error
from .base import Device, DriverDevice, attribute_property

logger = logging.getLogger(__name__)


class TachoMotor(Device):
    """Motor with a rotation sensor (tachometer)."""

    CLASS_NAME = "tacho-motor"

    # Commands
    COMMAND_RUN_FOREVER = "run-forever"
    COMMAND_RUN_TO_ABS_POS = "run-to-abs-pos"
    COMMAND_RUN_TO_REL_POS = "run-to-rel-pos"
    COMMAND_RUN_TIMED = "run-timed"
    COMMAND_RUN_DIRECT = "run-direct"
    COMMAND_STOP = "stop"
    COMMAND_RESET = "reset"

    # Polarities
    POLARITY_NORMAL = "normal"
    POLARITY_INVERSED = "inversed"

    # States
    STATE_RUNNING = "running"
    STATE_RAMPING = "ramping"
    STATE_HOLDING = "holding"
    STATE_OVERLOADED = "overloaded"
    STATE_STALLED = "stalled"

    # Stop actions
    STOP_ACTION_COAST = "coast"
    STOP_ACTION_BRAKE = "brake"
    STOP_ACTION_HOLD = "hold"

    count_per_rot = attribute_property(
        "count_per_rot", int, writable=False,
        doc="Tacho counts in one rotation (rotational motors only).")
    count_per_m = attribute_property(
        "count_per_m", int, writable=False,
        doc="Tacho counts in one meter (linear motors only).")
    full_travel_count = attribute_property(
        "full_travel_count", int, writable=False,
        doc="Tacho counts in the full travel (linear motors only).")

    duty_cycle = attribute_property(
        "duty_cycle", int, writable=False,
        doc="Current duty cycle in percent, -100 to 100.")
    duty_cycle_sp = attribute_property(
        "duty_cycle_sp", int,
        doc="Duty cycle setpoint used by run-direct.")

    polarity = attribute_property("polarity", str)
    position = attribute_property(
        "position", int,
        doc="Current position in tacho counts. Writing sets the origin.")
    position_sp = attribute_property(
        "position_sp", int,
        doc="Target position for run-to-abs-pos and run-to-rel-pos.")
    max_speed = attribute_property("max_speed", int, writable=False)

    speed = attribute_property("speed", int, writable=False)
    speed_sp = attribute_property("speed_sp", int)
    ramp_up_sp = attribute_property("ramp_up_sp", int)
    ramp_down_sp = attribute_property("ramp_down_sp", int)

    hold_pid_kp = attribute_property("hold_pid/Kp", float)
    hold_pid_ki = attribute_property("hold_pid/Ki", float)
    hold_pid_kd = attribute_property("hold_pid/Kd", float)
    speed_pid_kp = attribute_property("speed_pid/Kp", float)
    speed_pid_ki = attribute_property("speed_pid/Ki", float)
    speed_pid_kd = attribute_property("speed_pid/Kd", float)

    state = attribute_property(
        "state", list, writable=False,
        doc="State tokens currently reported by the motor.")
    stop_action = attribute_property("stop_action", str)
    stop_actions = attribute_property("stop_actions", list, writable=False)
    time_sp = attribute_property(
        "time_sp", int,
        doc="Run duration in milliseconds for run-timed.")

    # Commands

    def run_direct(self) -> None:
        """Run at ``duty_cycle_sp``, following later changes immediately."""
        self.set_command(self.COMMAND_RUN_DIRECT)

    def run_forever(self) -> None:
        """Run at ``speed_sp`` until another command is sent."""
        self.set_command(self.COMMAND_RUN_FOREVER)

    def run_to_abs_pos(self, position_sp: Optional[int] = None) -> None:
        """Run to an absolute position, optionally setting ``position_sp`` first."""
        if position_sp is not None:
            self.position_sp = position_sp
        self.set_command(self.COMMAND_RUN_TO_ABS_POS)

    def run_to_rel_pos(self, position_sp: Optional[int] = None) -> None:
        """Run to a position relative to the current one."""
        if position_sp is not None:
            self.position_sp = position_sp
        self.set_command(self.COMMAND_RUN_TO_REL_POS)

    def run_timed(self, time_sp: Optional[int] = None) -> None:
        """Run for ``time_sp`` milliseconds."""
        if time_sp is not None:
            self.time_sp = time_sp
        self.set_command(self.COMMAND_RUN_TIMED)

    def stop(self) -> None:
        """Stop using the current ``stop_action``."""
        self.set_command(self.COMMAND_STOP)

    def reset(self) -> None:
        """Reset all motor attributes to their defaults and stop."""
        self.set_command(self.COMMAND_RESET)

    # State tests

    def _has_state(self, token: str) -> bool:
        return token in self.state

    @property
    def is_running(self) -> bool:
        return self._has_state(self.STATE_RUNNING)

    @property
    def is_ramping(self) -> bool:
        return self._has_state(self.STATE_RAMPING)

    @property
    def is_holding(self) -> bool:
        return self._has_state(self.STATE_HOLDING)

    @property
    def is_overloaded(self) -> bool:
        return self._has_state(self.STATE_OVERLOADED)

    @property
    def is_stalled(self) -> bool:
        return self._has_state(self.STATE_STALLED)

    # Waiting

    def wait(self, condition: Callable[[], bool], timeout: Optional[float] = None) -> bool:
        """Block until ``condition()`` holds, re-checking on every state change.

        Args:
            condition: Predicate over live motor state
            timeout: Maximum wait in seconds, or None to wait forever

        Returns:
            True if the condition holds, False on timeout
        """
        fd = self.get_attribute("state").raw_descriptor()
        return wait_for(fd, condition, timeout)

    def _state_test(self, token: str, present: bool) -> Callable[[], bool]:
        def condition() -> bool:
            try:
                state = self.state
            except Ev3Error as e:
                # A failed read never satisfies the condition
                logger.debug(f"State read failed while waiting: {e}")
                return False
            return (token in state) == present

        return condition

    def wait_while(self, state: str, timeout: Optional[float] = None) -> bool:
        """Block while ``state`` is among the motor's state tokens.

        Example:
            >>> motor.run_timed(time_sp=1000)
            >>> motor.wait_while(TachoMotor.STATE_RUNNING, timeout=2.0)
            True
        """
        return self.wait(self._state_test(state, present=False), timeout)

    def wait_until(self, state: str, timeout: Optional[float] = None) -> bool:
        """Block until ``state`` is among the motor's state tokens."""
        return self.wait(self._state_test(state, present=True), timeout)

    def wait_until_not_moving(self, timeout: Optional[float] = None) -> bool:
        """Block until the motor is no longer running."""
        return self.wait_while(self.STATE_RUNNING, timeout)


class LargeMotor(TachoMotor, DriverDevice):
    """EV3 large servo motor."""

    DRIVER_NAME = "lego-ev3-l-motor"


class MediumMotor(TachoMotor, DriverDevice):
    """EV3 medium servo motor."""

    DRIVER_NAME = "lego-ev3-m-motor"
