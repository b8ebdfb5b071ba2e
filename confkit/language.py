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

"""Supported languages and locale tags.

The site is published in two languages. Anything that branches on language
takes a :class:`Language` value, never a raw tag, so that adding a language
means adding a member here and a row to each per-language table.

Locales are parsed from HTTP headers:

    >>> Locale.parse('fr-ch')
    Locale(language='fr', country='CH')
    >>> [str(l) for l in parse_accept_language('en;q=0.8, fr-CH, fr;q=0.9')]
    ['fr-CH', 'fr', 'en']
"""

import collections
import enum
import logging
import re

from confkit.exceptions import ConfkitUnknownLanguage

LOG = logging.getLogger(__name__)

SUBTAG_SEPARATORS = re.compile(r'[-_]')
LANGUAGE_SUBTAG = re.compile(r'^[A-Za-z]{1,8}$')
REGION_SUBTAG = re.compile(r'^(?:[A-Za-z]{2}|\d{3})$')


class Locale(collections.namedtuple('Locale', ['language', 'country'])):

    """A language and (optional) region pair, ex. fr-FR."""

    __slots__ = ()

    def __new__(cls, language, country=''):
        """Normalize case: language is lowercase, country is uppercase."""
        return super(Locale, cls).__new__(cls, language.lower(),
                                          (country or '').upper())

    @classmethod
    def parse(cls, tag):
        """Parse a language tag (`fr`, `fr-FR`, `fr_fr`) into a Locale.

        Subtags other than the region (scripts, variants) are ignored.
        """
        if not tag or not tag.strip():
            raise ValueError("A locale tag cannot be empty")
        subtags = SUBTAG_SEPARATORS.split(tag.strip())
        if not LANGUAGE_SUBTAG.match(subtags[0]):
            raise ValueError("'%s' is not a valid locale tag" % tag)
        country = ''
        for subtag in subtags[1:]:
            if REGION_SUBTAG.match(subtag):
                country = subtag
                break
        return cls(subtags[0], country)

    def __str__(self):
        """Render as a BCP 47 tag."""
        if self.country:
            return '%s-%s' % (self.language, self.country)
        return self.language


ENGLISH = Locale('en')
FRENCH = Locale('fr')


class Language(enum.Enum):

    """Languages the site is published in."""

    ENGLISH = 'en'
    FRENCH = 'fr'

    @property
    def tag(self):
        """The two-letter ISO 639-1 tag."""
        return self.value

    def to_locale(self):
        """Return the locale for this language."""
        return Locale(self.tag)

    @classmethod
    def find_by_tag(cls, tag):
        """Find the language for a tag such as `en`, `fr-FR` or `EN_gb`.

        :raises ConfkitUnknownLanguage: if no language matches.
        """
        if tag:
            primary = SUBTAG_SEPARATORS.split(tag.strip())[0].lower()
            for member in cls:
                if member.tag == primary:
                    return member
        raise ConfkitUnknownLanguage(tag)


def parse_accept_language(header):
    """Parse an Accept-Language header into locales, best first.

    Entries are sorted by quality (ties keep header order). Wildcards,
    entries with q=0 or a q outside (0, 1] and entries that cannot be parsed
    are dropped.
    """
    if not header:
        return []
    ranked = []
    for position, entry in enumerate(header.split(',')):
        tag, _, params = entry.partition(';')
        tag = tag.strip()
        if not tag or tag == '*':
            continue
        quality = 1.0
        for param in params.split(';'):
            key, _, value = param.partition('=')
            if key.strip().lower() == 'q':
                try:
                    quality = float(value)
                except ValueError:
                    quality = None
        # q must lie in (0, 1]; NaN fails the comparison too
        if quality is None or not 0 < quality <= 1:
            LOG.debug("Ignoring Accept-Language entry '%s'", entry.strip())
            continue
        try:
            locale = Locale.parse(tag)
        except ValueError:
            LOG.debug("Ignoring malformed Accept-Language tag '%s'", tag)
            continue
        ranked.append((-quality, position, locale))
    return [locale for _, _, locale in sorted(ranked)]
