#!/usr/bin/env python3
"""
Interactive Motor Test Script.

Run this on the brick with a large motor plugged into output A. It spins the
motor for one second, waits for it to stop and prints what the driver
reports along the way.
"""

import sys
import logging
from pathlib import Path

# Add package to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ev3 import LargeMotor, MotorPort, NotFoundError, MultipleMatchesError, TachoMotor

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)


def main():
    print("Looking for a large motor on outA...")
    try:
        motor = LargeMotor.get(MotorPort.OUT_A)
    except NotFoundError:
        print("No large motor on outA, trying any port...")
        try:
            motor = LargeMotor.find()
        except NotFoundError:
            print("No large motor connected!")
            return
        except MultipleMatchesError as e:
            print(f"Several large motors found ({', '.join(e.names)}); plug one into outA.")
            return

    print(f"Found {motor.driver.name} at {motor.address}")
    print(f"Driver:       {motor.driver_name}")
    print(f"Commands:     {' '.join(motor.commands)}")
    print(f"Counts/rot:   {motor.count_per_rot}")
    print(f"Max speed:    {motor.max_speed}")
    print(f"Position:     {motor.position}")

    try:
        motor.stop_action = TachoMotor.STOP_ACTION_BRAKE
        motor.speed_sp = motor.max_speed // 2

        print("\nRunning for 1 second...")
        motor.run_timed(time_sp=1000)

        if motor.wait_until(TachoMotor.STATE_RUNNING, timeout=0.5):
            print(f"State: {motor.state}")

        if motor.wait_until_not_moving(timeout=3.0):
            print("Motor stopped.")
        else:
            print("Motor still running after 3 seconds!")

        print(f"Position:     {motor.position}")

    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        motor.stop()
        print("Done.")


if __name__ == "__main__":
    main()
