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

"""Text utilities: accents, slugs, hashes."""

import hashlib
import random
import re
import unicodedata

# Unicode block "Combining Diacritical Marks"
COMBINING_MARKS = re.compile('[\u0300-\u036f]+')
NOT_SLUG_CHARACTERS = re.compile(r'[^a-z0-9\s]')
HYPHENS = re.compile(r'-+')

# Identifiers already shared with other systems were hashed from cp1252 bytes
MD5_ENCODING = 'cp1252'


def strip_accents(value):
    """Remove diacritics, ex. `Crème brûlée` -> `Creme brulee`."""
    return COMBINING_MARKS.sub('', unicodedata.normalize('NFD', value))


def to_slug(value):
    """Turn free text into a URL path segment.

    >>> to_slug("Café du Monde!")
    'cafe-du-monde'
    """
    slug = strip_accents(value.lower()).replace('\n', ' ')
    slug = NOT_SLUG_CHARACTERS.sub(' ', slug)
    slug = '-'.join(slug.split())
    return HYPHENS.sub('-', slug)


def md5_hex(value):
    """Return the lowercase hex MD5 digest of value, or None if empty.

    Not for anything security related; this matches identifiers (such as
    avatar hashes) computed by other services.
    """
    if not value:
        return None
    data = value.encode(MD5_ENCODING, errors='replace')
    return hashlib.md5(data).hexdigest()


def shuffle(iterable):
    """Return a new list with the items of iterable in random order."""
    items = list(iterable)
    random.shuffle(items)
    return items
