"""Sources of telemetry readings.

Any iterable of Reading objects can drive the processor. This module
provides an interactive prompt source and a CSV file source, both of which
validate their input before building readings.
"""

import csv
import math
import sys
from datetime import datetime

from .models import Reading
from .utils import ensure_utc

# Field name and interactive prompt, in prompt order
READING_FIELDS = [
    ("power_produced", "Power Produced (W): "),
    ("power_consumed", "Power Consumed (W): "),
    ("battery_soc", "Battery SOC (%): "),
    ("irradiance", "Irradiance (W/m^2): "),
    ("temperature", "Temperature (°C): "),
    ("panel_voltage", "Panel Voltage (V): "),
    ("panel_current", "Panel Current (A): "),
]


class ReadingValidationError(ValueError):
    """Raised when a telemetry field cannot be parsed."""

    def __init__(self, field, value, line=None, reason="invalid value for"):
        self.field = field
        self.value = value
        self.line = line
        location = f"line {line}: " if line is not None else ""
        super().__init__(f"{location}{reason} {field}: {value!r}")


def parse_field(field, text, line=None):
    """Parse a telemetry field as a finite float.

    Args:
        field: Field name, used in the error
        text: Raw text value
        line: Optional source line number, used in the error

    Returns:
        float: Parsed value

    Raises:
        ReadingValidationError: If the value is not a finite number
    """
    try:
        value = float(text)
    except (TypeError, ValueError):
        raise ReadingValidationError(field, text, line) from None
    if not math.isfinite(value):
        raise ReadingValidationError(field, text, line)
    return value


def parse_timestamp(text, line=None):
    try:
        return ensure_utc(datetime.fromisoformat(text.strip()))
    except ValueError:
        raise ReadingValidationError("timestamp", text, line) from None


def prompt_count(input_func=input, out=None):
    """Ask how many readings will be entered.

    Invalid answers are rejected and asked again. End of input counts as zero.

    Returns:
        int: Number of readings
    """
    out = out if out is not None else sys.stdout
    while True:
        try:
            text = input_func("Enter the number of solar readings: ")
        except EOFError:
            return 0
        try:
            count = int(text)
        except ValueError:
            count = -1
        if count >= 0:
            return count
        print(f"Error: {text!r} is not a valid number of readings", file=out)


def prompt_readings(count, input_func=input, out=None):
    """Read readings interactively, one field at a time.

    A value that is not a finite number is rejected and the same field is
    asked for again. End of input stops the session; a partly entered
    reading is discarded.

    Args:
        count: Number of readings to ask for
        input_func: Function used to prompt, defaults to input
        out: Text stream for messages, defaults to sys.stdout

    Yields:
        Reading: Each completed reading, timestamped when completed
    """
    out = out if out is not None else sys.stdout
    for i in range(count):
        print(f"\nEnter data for Reading #{i + 1}:", file=out)
        values = {}
        for field, prompt in READING_FIELDS:
            while field not in values:
                try:
                    text = input_func(prompt)
                except EOFError:
                    print("\nEnd of input", file=out)
                    return
                try:
                    values[field] = parse_field(field, text)
                except ReadingValidationError as e:
                    print(f"Error: {e}. Please try again.", file=out)
        yield Reading(**values)


def csv_readings(path):
    """Read readings from a CSV file.

    The header row must name the seven telemetry fields. An optional
    timestamp column holds ISO-8601 times; naive times are taken as UTC and
    rows without one are timestamped when read.

    Args:
        path: Path to the CSV file

    Yields:
        Reading: One reading per data row

    Raises:
        ReadingValidationError: On the first malformed row
    """
    with open(path, newline="") as fd:
        reader = csv.DictReader(fd)
        missing = [field for field, _ in READING_FIELDS if field not in (reader.fieldnames or [])]
        if missing:
            raise ReadingValidationError(", ".join(missing), reader.fieldnames, 1, reason="missing columns")

        for row in reader:
            line = reader.line_num
            values = {field: parse_field(field, row[field], line) for field, _ in READING_FIELDS}
            if row.get("timestamp"):
                values["timestamp"] = parse_timestamp(row["timestamp"], line)
            yield Reading(**values)
