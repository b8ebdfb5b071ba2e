# Copyright (c) 2011-2015 Rackspace US, Inc.
#
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
"""Confkit exceptions."""

__all__ = (
    'ConfkitException',
    'ConfkitConfigError',
    'ConfkitConfigUnknownOption',
    'ConfkitUnknownLanguage',
)


class ConfkitException(Exception):

    """Base exception for all exceptions raised by the confkit package."""


class ConfkitConfigError(ConfkitException):

    """Errors raised by confkit/config."""


class ConfkitConfigUnknownOption(ConfkitConfigError):

    """An option defined in the specified source has no match.

    For example, `--default-language` was given a tag that does not name a
    supported language.
    """


class ConfkitUnknownLanguage(ConfkitException, ValueError):

    """No supported language matches the supplied tag."""

    def __init__(self, tag):
        """Customize Exception Constructor."""
        super(ConfkitUnknownLanguage, self).__init__()
        self.tag = tag

    def __str__(self):
        """Include custom data in string."""
        return "No supported language matches the tag '%s'" % (self.tag,)

    def __repr__(self):
        """Include custom data in representation."""
        return 'ConfkitUnknownLanguage(%r)' % (self.tag,)
