"""
Event loading module.

This module handles:
- Loading the care log from a JSON file or standard input
- Parsing ISO 8601 timestamps (a trailing 'Z' is accepted)
- Building one typed event per record
- Aborting on the first invalid record; nothing is skipped or repaired
"""

import json
import sys
from datetime import datetime, timedelta
from typing import Optional

from babyreport.models import (
    Event,
    Diaper,
    BottleFeeding,
    LeftBreastFeeding,
    RightBreastFeeding,
    Pumping,
    TummyTime,
    Sleep,
    OtherEvent,
)


# Required fields per event type; unknown types only need a time
REQUIRED_FIELDS = {
    'diaper': {'time'},
    'bottle': {'time', 'ounces'},
    'left_breast': {'time', 'duration_min'},
    'right_breast': {'time', 'duration_min'},
    'pumping': {'start', 'ounces'},
    'tummy_time': {'start', 'duration_min'},
    'sleep': {'start'},
}
OTHER_REQUIRED_FIELDS = {'time'}


def parse_timestamp(value, field_name: str) -> datetime:
    """
    Parse an ISO 8601 timestamp, accepting a 'Z' suffix for UTC.
    """
    if not isinstance(value, str):
        raise ValueError(f"'{field_name}' must be an ISO 8601 string, got {type(value).__name__}")
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError as e:
        raise ValueError(f"Invalid timestamp in '{field_name}'. Error: {e}")


def parse_optional_timestamp(entry: dict, field_name: str) -> Optional[datetime]:
    value = entry.get(field_name)
    if value is None:
        return None
    return parse_timestamp(value, field_name)


def parse_number(entry: dict, field_name: str) -> float:
    value = entry[field_name]
    # bool is an int subclass, but "true ounces" is never meant
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{field_name}' must be a number, got {value!r}")
    return float(value)


def parse_minutes(entry: dict, field_name: str) -> timedelta:
    return timedelta(minutes=parse_number(entry, field_name))


def validate_event_entry(entry: dict, index: int) -> str:
    """
    Check that an event entry is an object with a type and its required fields.
    Returns the event type.
    """
    if not isinstance(entry, dict):
        raise ValueError(f"Event record {index}: Expected an object, got {type(entry).__name__}")

    event_type = entry.get('type')
    if not isinstance(event_type, str) or not event_type:
        raise ValueError(f"Event record {index}: Missing or invalid 'type'")

    required = REQUIRED_FIELDS.get(event_type, OTHER_REQUIRED_FIELDS)
    missing_fields = required - set(entry.keys())
    if missing_fields:
        raise ValueError(
            f"Event record {index} ({event_type}): Missing required fields: "
            f"{', '.join(sorted(missing_fields))}. Required: {', '.join(sorted(required))}"
        )
    return event_type


def parse_event(entry: dict, index: int) -> Event:
    """
    Build the typed event for one record.
    """
    event_type = validate_event_entry(entry, index)

    try:
        if event_type == 'diaper':
            poo = entry.get('poo', False)
            if not isinstance(poo, bool):
                raise ValueError(f"'poo' must be true or false, got {poo!r}")
            return Diaper(time=parse_timestamp(entry['time'], 'time'), poo=poo)

        if event_type == 'bottle':
            return BottleFeeding(
                time=parse_timestamp(entry['time'], 'time'),
                ounces=parse_number(entry, 'ounces')
            )

        if event_type in ('left_breast', 'right_breast'):
            cls = LeftBreastFeeding if event_type == 'left_breast' else RightBreastFeeding
            return cls(
                time=parse_timestamp(entry['time'], 'time'),
                duration=parse_minutes(entry, 'duration_min')
            )

        if event_type == 'pumping':
            return Pumping(
                start=parse_timestamp(entry['start'], 'start'),
                end=parse_optional_timestamp(entry, 'end'),
                ounces=parse_number(entry, 'ounces')
            )

        if event_type == 'tummy_time':
            return TummyTime(
                start=parse_timestamp(entry['start'], 'start'),
                duration=parse_minutes(entry, 'duration_min')
            )

        if event_type == 'sleep':
            start = parse_timestamp(entry['start'], 'start')
            end = parse_optional_timestamp(entry, 'end')
            if entry.get('duration_min') is not None:
                duration = parse_minutes(entry, 'duration_min')
            elif end is not None:
                duration = end - start
            else:
                duration = timedelta()
            return Sleep(start=start, end=end, duration=duration)

        return OtherEvent(time=parse_timestamp(entry['time'], 'time'), kind=event_type)

    except (ValueError, TypeError) as e:
        raise ValueError(f"Event record {index} ({event_type}): {e}")


def parse_events(data) -> list[Event]:
    """
    Build typed events from an already decoded JSON document.
    """
    if not isinstance(data, dict):
        raise TypeError(f"Event log must be a JSON object, got {type(data).__name__}")

    # Check for 'events' key
    if 'events' not in data:
        raise KeyError("Event log JSON must contain 'events' key")

    if not isinstance(data['events'], list):
        raise TypeError(f"'events' must be a list, got {type(data['events']).__name__}")

    return [parse_event(entry, idx) for idx, entry in enumerate(data['events'])]


def load_events(filepath: str) -> list[Event]:
    """
    Load the event log from a JSON file, or from standard input when
    filepath is '-'.
    """
    try:
        if filepath == '-':
            data = json.load(sys.stdin)
        else:
            with open(filepath, 'r') as f:
                data = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Event log file not found: {filepath}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in event log: {e}")

    return parse_events(data)
