"""
Clock Module - Nixie tube clock widget
Formats local time and date into the fixed-width string the tubes show:

    [hour(2)][minute(2)][AM|PM(2)][month(2)][day(2)][year(2)][blank(2)]

The hour, month and day drop a leading zero the way a physical tube
display would; the last two tubes are unlit padding.
"""

from datetime import datetime

DISPLAY_WIDTH = 14
BLANK = ' '
REFRESH_INTERVAL_SECONDS = 60

# (label, start, end) slices of the display string, top to bottom
TUBE_ROWS = (
    ('hour', 0, 2),
    ('minute', 2, 4),
    ('meridiem', 4, 6),
    ('month', 6, 8),
    ('day', 8, 10),
    ('year', 10, 12),
)


def to_twelve_hour(hour):
    """
    Convert a 0-23 hour to (1-12 hour, 'AM' or 'PM')

    >>> to_twelve_hour(0)
    (12, 'AM')
    >>> to_twelve_hour(12)
    (12, 'PM')
    """
    meridiem = 'PM' if hour >= 12 else 'AM'
    if hour > 12:
        hour -= 12
    elif hour == 0:
        hour = 12
    return hour, meridiem


def blank_leading_zero(field):
    if field.startswith('0'):
        return BLANK + field[1:]
    return field


def format_display(now):
    """Build the 14-character display string for a datetime"""
    hour, meridiem = to_twelve_hour(now.hour)
    hour_str = blank_leading_zero(f'{hour:02d}')
    minute_str = f'{now.minute:02d}'
    month_str = blank_leading_zero(f'{now.month:02d}')
    day_str = blank_leading_zero(f'{now.day:02d}')
    year_str = f'{now.year % 100:02d}'

    display = hour_str + minute_str + meridiem + month_str + day_str + year_str
    return display.ljust(DISPLAY_WIDTH, BLANK)


class NixieClock:
    """Display state for one clock widget; time comes from an injectable source"""

    def __init__(self, time_source=None, powered=False):
        self.time_source = time_source or datetime.now
        self.powered = powered
        self.display = format_display(self.time_source())

    def refresh(self):
        self.display = format_display(self.time_source())
        return self.display

    def toggle(self):
        """Flip the powered (glowing) state; cosmetic only"""
        self.powered = not self.powered
        return self.powered

    @property
    def css_class(self):
        return 'clock' if self.powered else 'clock off'

    def rows(self):
        """Per-row digit pairs for the template"""
        return [(label, self.display[start:end]) for label, start, end in TUBE_ROWS]

    def to_dict(self):
        return {
            'display': self.display,
            'powered': self.powered,
            'refresh_seconds': REFRESH_INTERVAL_SECONDS,
        }
