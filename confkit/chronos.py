# Copyright (c) 2011-2015 Rackspace US, Inc.
# All Rights Reserved.
#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.

"""Confkit date/time formatting.

Use for consistent, human-readable dates on pages and a canonical timestamp
in feeds.

    format_date(value, Language.ENGLISH)       March 3rd 2024
    format_date(value, Language.FRENCH)        3 mars 2024
    format_talk_date(value, Language.ENGLISH)  Sunday March 3rd
    format_talk_date(value, Language.FRENCH)   Dimanche 3 mars
    format_talk_time(value, Language.ENGLISH)  10:15
    format_talk_time(value, Language.FRENCH)   10h15
    to_rfc3339(value)                          2024-03-03T10:15:00Z

Month and weekday names come from the tables below rather than the process
locale (`strftime('%B')` depends on `setlocale`, which is process-wide).
Timestamps are always UTC. We leave it to clients to convert to local time.
"""

import datetime

from confkit.language import Language

RFC3339_FORMAT = "%04d-%02d-%02dT%02d:%02d:%02dZ"

MONTHS = {
    Language.ENGLISH: (
        'January', 'February', 'March', 'April', 'May', 'June', 'July',
        'August', 'September', 'October', 'November', 'December'),
    Language.FRENCH: (
        'janvier', 'février', 'mars', 'avril', 'mai', 'juin', 'juillet',
        'août', 'septembre', 'octobre', 'novembre', 'décembre'),
}

# Indexed by datetime.weekday(): Monday is 0
WEEKDAYS = {
    Language.ENGLISH: (
        'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday',
        'Sunday'),
    Language.FRENCH: (
        'lundi', 'mardi', 'mercredi', 'jeudi', 'vendredi', 'samedi',
        'dimanche'),
}

TIME_FORMATS = {
    Language.ENGLISH: '%02d:%02d',
    Language.FRENCH: '%02dh%02d',
}


def _ordinal(day):
    """Suffix a day of the month with st, nd, rd or th."""
    if 11 <= day <= 13:
        return '%dth' % day
    return '%d%s' % (day, {1: 'st', 2: 'nd', 3: 'rd'}.get(day % 10, 'th'))


DAYS_LOOKUP = {day: _ordinal(day) for day in range(1, 32)}


def ordinal(day):
    """Return the English ordinal for a day of the month (ex. 21st)."""
    try:
        return DAYS_LOOKUP[day]
    except KeyError:
        raise ValueError("%r is not a day of the month" % (day,))


def _check_language(language):
    if not isinstance(language, Language):
        raise TypeError("language must be a Language. A %s was passed."
                        % type(language))


def format_date(value, language):
    """Render a calendar date, ex. `March 3rd 2024` or `3 mars 2024`."""
    _check_language(language)
    month = MONTHS[language][value.month - 1]
    if language is Language.ENGLISH:
        return '%s %s %04d' % (month, DAYS_LOOKUP[value.day], value.year)
    return '%d %s %04d' % (value.day, month, value.year)


def format_talk_date(value, language):
    """Render the day a talk is given on.

    English reads `Monday March 3rd`; French reads `Lundi 3 mars` (French
    weekday names are lowercase so the first letter is capitalized).
    """
    _check_language(language)
    weekday = WEEKDAYS[language][value.weekday()]
    month = MONTHS[language][value.month - 1]
    if language is Language.ENGLISH:
        return '%s %s %s' % (weekday, month, DAYS_LOOKUP[value.day])
    rendered = '%s %d %s' % (weekday, value.day, month)
    return rendered[:1].upper() + rendered[1:]


def format_talk_time(value, language):
    """Render the time a talk starts, ex. `14:05` or `14h05`."""
    _check_language(language)
    return TIME_FORMATS[language] % (value.hour, value.minute)


def to_rfc3339(value):
    """The canonical timestamp format (in UTC).

    :param value: a datetime. Naive datetimes are taken to already be in UTC;
        aware datetimes are converted to UTC.
    """
    if not isinstance(value, datetime.datetime):
        raise TypeError("value must be a datetime. A %s was passed."
                        % type(value))
    if value.tzinfo is not None and value.utcoffset() is not None:
        value = value.astimezone(datetime.timezone.utc)
    return RFC3339_FORMAT % (value.year, value.month, value.day,
                             value.hour, value.minute, value.second)


def parse_rfc3339(value):
    """Convert an RFC 3339 timestamp to a naive datetime in UTC.

    Accepts a `Z` suffix or a numeric offset (ex. `+02:00`).
    """
    if value.endswith(('Z', 'z')):
        return datetime.datetime.strptime(value[:-1], "%Y-%m-%dT%H:%M:%S")
    parsed = datetime.datetime.strptime(value, "%Y-%m-%dT%H:%M:%S%z")
    return parsed.astimezone(datetime.timezone.utc).replace(tzinfo=None)
