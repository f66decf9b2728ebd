"""Prompt builder for the Gemini iCal extraction call.

The prompt embeds the raw feed verbatim and spells out the output
contract the response validator and reconciler rely on: UTC timestamps,
silent dropping of events without a start, ``error`` only for
structurally invalid input, and no ``error`` for a valid empty calendar.
"""

from __future__ import annotations


def build_extraction_prompt(ical_content: str) -> str:
    """Build the extraction instruction for one iCalendar feed.

    The output is deterministic: the same feed text always yields the
    same prompt.

    Args:
        ical_content: The raw feed body, interpolated without changes.

    Returns:
        The complete prompt string.
    """
    return f"""\
You are an expert iCalendar data parser. Given the following iCalendar (.ics) data,
extract all VEVENT components.

## Fields

For each VEVENT, provide:
- uid: The unique identifier (UID property).
- summary: The event summary (SUMMARY property).
- startDate: The event start (DTSTART property) as a full ISO 8601 UTC timestamp
  (YYYY-MM-DDTHH:mm:ss.sssZ).
- endDate: The event end (DTEND property) as a full ISO 8601 UTC timestamp
  (YYYY-MM-DDTHH:mm:ss.sssZ).
- description: The event description (DESCRIPTION property), if present.
- location: The event location (LOCATION property), if present.

## Date Normalisation

- If a TZID is present (e.g. DTSTART;TZID=America/New_York:20240820T140000),
  convert the time to UTC.
- A date-only value (e.g. DTSTART;VALUE=DATE:20240820) starts at midnight UTC
  of that date (2024-08-20T00:00:00.000Z). A date-only DTEND likewise means
  midnight UTC at the beginning of that day.
- Every startDate and endDate must end with 'Z'. endDate must not be earlier
  than startDate.

## Filtering

- Return only events that have a DTSTART. Silently drop any VEVENT without
  one; do not report it as an error.

## Output

Output a single JSON object matching this structure:
{{ "events": [{{ "uid": "...", "summary": "...", "startDate": "...", "endDate": "...", "description": "optional", "location": "optional" }}], "error": "optional error message" }}

- If there are parsing errors or the iCalendar data is structurally invalid
  (e.g. malformed VCALENDAR structure), set the "error" field to a descriptive
  message and return an empty "events" list.
- If the iCalendar data is valid but simply contains no VEVENT components (or no
  VEVENTs with a DTSTART property), return an empty "events" list and do NOT set
  the "error" field.
- Otherwise, return the list of events and omit the "error" field.

## iCalendar Data

```
{ical_content}
```
"""
