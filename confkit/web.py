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

"""Bottle request and response helpers for a bilingual site.

Example usage:

    import bottle
    from confkit import web

    @bottle.get('/<slug>')
    def talk(slug):
        if web.language() is Language.FRENCH:
            return web.see_other(web.localized_path('/talks', web.locale()))
        web.html()
        return render(slug)

Functions that take a request or response default to bottle's thread-local
`bottle.request` and `bottle.response`.
"""

import functools
import logging

import bottle

from confkit import config
from confkit.exceptions import ConfkitConfigUnknownOption
from confkit.exceptions import ConfkitUnknownLanguage
from confkit import language as i18n
from confkit.language import Language

LOG = logging.getLogger(__name__)

APPLICATION_JSON_UTF8 = 'application/json;charset=UTF-8'
APPLICATION_XML = 'application/xml'
TEXT_HTML = 'text/html'

# Paths in this language are served under a prefix; the other is the root
PREFIXED_LANGUAGE = Language.ENGLISH

OPTIONS = [
    config.Option("--default-language",
                  default=Language.ENGLISH.tag,
                  ini_section="i18n",
                  env="CONFKIT_DEFAULT_LANGUAGE",
                  help="language tag used when a request does not name a "
                  "supported language"),
]

DEFAULT_LANGUAGE = Language.ENGLISH


def configure(conf):
    """Apply the `default_language` option.

    :param conf: object with configuration namespace (ex. config.Config)
    """
    global DEFAULT_LANGUAGE  # pylint: disable=W0603
    try:
        DEFAULT_LANGUAGE = Language.find_by_tag(conf.default_language)
    except ConfkitUnknownLanguage as exc:
        raise ConfkitConfigUnknownOption(
            "default_language: %s" % exc)
    LOG.debug("Default language set.",
              extra={'data': {'default': DEFAULT_LANGUAGE.tag}})


def _content_language(request):
    """Return the Content-Language locale or None if absent or invalid."""
    header = request.get_header('Content-Language')
    if not header:
        return None
    # Content-Language may list several languages; the first one wins
    try:
        return i18n.Locale.parse(header.split(',')[0])
    except ValueError:
        LOG.debug("Ignoring malformed Content-Language '%s'", header)
        return None


def language(request=None):
    """Determine the language of a request.

    Content-Language is used if present, otherwise the best match in
    Accept-Language. Falls back to DEFAULT_LANGUAGE.
    """
    if request is None:
        request = bottle.request
    locale = _content_language(request)
    if locale is None:
        accepted = i18n.parse_accept_language(
            request.get_header('Accept-Language'))
        locale = accepted[0] if accepted else None
    if locale is not None:
        try:
            return Language.find_by_tag(locale.language)
        except ConfkitUnknownLanguage:
            pass
    LOG.debug("Falling back to the default language.",
              extra={'data': {'tag': locale and str(locale),
                              'default': DEFAULT_LANGUAGE.tag}})
    return DEFAULT_LANGUAGE


def locale(request=None):
    """Return the Content-Language locale of a request or the default."""
    if request is None:
        request = bottle.request
    found = _content_language(request)
    if found is None:
        found = DEFAULT_LANGUAGE.to_locale()
        header = request.get_header('Content-Language')
        LOG.debug("Falling back to the default locale.",
                  extra={'data': {'tag': header, 'default': str(found)}})
    return found


def _content_type(response, media_type):
    if response is None:
        response = bottle.response
    response.content_type = media_type
    return response


def json(response=None):
    """Mark a response as UTF-8 JSON."""
    return _content_type(response, APPLICATION_JSON_UTF8)


def xml(response=None):
    """Mark a response as XML."""
    return _content_type(response, APPLICATION_XML)


def html(response=None):
    """Mark a response as HTML."""
    return _content_type(response, TEXT_HTML)


def produces(media_type):
    """Decorator to set the content type of a route's response.

        @bottle.get('/feed')
        @web.produces(web.APPLICATION_XML)
        def feed():
            ...
    """
    def wrap(fxn):
        """Return a decorated callable."""
        def wrapped(*args, **kwargs):
            """Set the header then call the route."""
            _content_type(None, media_type)
            return fxn(*args, **kwargs)
        return functools.wraps(fxn)(wrapped)
    return wrap


def permanent_redirect(uri):
    """Return a 308 Permanent Redirect response to uri."""
    return bottle.HTTPResponse(status=308, Location=uri)


def see_other(uri):
    """Return a 303 See Other response to uri."""
    return bottle.HTTPResponse(status=303, Location=uri)


def _language_tag(locale):
    if isinstance(locale, Language):
        return locale.tag
    if isinstance(locale, i18n.Locale):
        return locale.language
    return i18n.Locale.parse(locale).language


def locale_prefix(locale):
    """Return the path prefix for a locale: `/en` for English, else ''.

    :param locale: a Locale, a Language or a tag such as 'en-GB'.
    """
    if _language_tag(locale) == PREFIXED_LANGUAGE.tag:
        return '/%s' % PREFIXED_LANGUAGE.tag
    return ''


def localized_path(path, locale):
    """Prefix an absolute path for a locale, ex. `/talks` -> `/en/talks`."""
    return '%s/%s' % (locale_prefix(locale), path.lstrip('/'))
