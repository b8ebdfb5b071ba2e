# pylint: disable=C0103,C0111,R0903,R0904

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

"""Test :mod:`confkit.web`."""

import os
import unittest

import bottle
import mock
import webtest

from confkit import config
from confkit import exceptions
from confkit import log
from confkit import language as i18n
from confkit.language import Language
from confkit import web


def request_with(**headers):
    """Build a bottle request with the given HTTP_* headers."""
    environ = {'HTTP_%s' % k.upper(): v for k, v in headers.items()}
    return bottle.BaseRequest(environ=environ)


class TestLanguage(unittest.TestCase):

    """Tests for :func:`confkit.web.language`."""

    def test_content_language(self):
        request = request_with(content_language='fr',
                               accept_language='en')
        self.assertIs(web.language(request), Language.FRENCH)

    def test_content_language_with_region(self):
        request = request_with(content_language='fr-CA')
        self.assertIs(web.language(request), Language.FRENCH)

    def test_accept_language(self):
        request = request_with(accept_language='fr-FR,fr;q=0.9,en;q=0.8')
        self.assertIs(web.language(request), Language.FRENCH)

    def test_accept_language_quality(self):
        request = request_with(accept_language='fr;q=0.4, en;q=0.9')
        self.assertIs(web.language(request), Language.ENGLISH)

    def test_unsupported_falls_back(self):
        request = request_with(accept_language='de-DE')
        self.assertIs(web.language(request), Language.ENGLISH)

    def test_no_headers_falls_back(self):
        self.assertIs(web.language(request_with()), Language.ENGLISH)

    def test_malformed_content_language(self):
        request = request_with(content_language='??',
                               accept_language='fr')
        self.assertIs(web.language(request), Language.FRENCH)

    @mock.patch.object(web, 'DEFAULT_LANGUAGE', Language.FRENCH)
    def test_configured_fallback(self):
        request = request_with(accept_language='de')
        self.assertIs(web.language(request), Language.FRENCH)

    def test_default_request(self):
        bottle.request.bind({'HTTP_ACCEPT_LANGUAGE': 'fr'})
        self.addCleanup(bottle.request.bind, {})
        self.assertIs(web.language(), Language.FRENCH)

    def test_fallback_logs_data(self):
        with self.assertLogs('confkit.web', level='DEBUG') as logs:
            web.language(request_with(accept_language='de'))
        record = logs.records[0]
        self.assertEqual(record.data, {'tag': 'de', 'default': 'en'})
        formatter = log.DebugFormatter('%(message)s')
        self.assertEqual(formatter.format(record),
                         "Falling back to the default language. "
                         "data={'default': 'en', 'tag': 'de'}")

    def test_fallback_without_headers_logs_data(self):
        with self.assertLogs('confkit.web', level='DEBUG') as logs:
            web.language(request_with())
        self.assertEqual(logs.records[0].data, {'tag': None, 'default': 'en'})


class TestLocale(unittest.TestCase):

    """Tests for :func:`confkit.web.locale`."""

    def test_content_language(self):
        request = request_with(content_language='fr-FR')
        self.assertEqual(web.locale(request), i18n.Locale('fr', 'FR'))

    def test_ignores_accept_language(self):
        request = request_with(accept_language='fr')
        self.assertEqual(web.locale(request), i18n.ENGLISH)

    def test_malformed(self):
        request = request_with(content_language='')
        self.assertEqual(web.locale(request), i18n.ENGLISH)

    @mock.patch.object(web, 'DEFAULT_LANGUAGE', Language.FRENCH)
    def test_configured_default(self):
        self.assertEqual(web.locale(request_with()), i18n.FRENCH)

    def test_fallback_logs_data(self):
        with self.assertLogs('confkit.web', level='DEBUG') as logs:
            web.locale(request_with(content_language='??'))
        self.assertEqual(logs.records[-1].data, {'tag': '??', 'default': 'en'})


class TestContentTypes(unittest.TestCase):

    def setUp(self):
        self.response = bottle.BaseResponse()

    def test_json(self):
        result = web.json(self.response)
        self.assertIs(result, self.response)
        self.assertEqual(self.response.content_type,
                         'application/json;charset=UTF-8')

    def test_xml(self):
        self.assertIs(web.xml(self.response), self.response)
        self.assertEqual(self.response.content_type, 'application/xml')

    def test_html(self):
        self.assertIs(web.html(self.response), self.response)
        self.assertEqual(self.response.content_type, 'text/html')

    def test_only_header_changes(self):
        self.response.status = 201
        self.response.set_header('X-Other', 'kept')
        web.json(self.response)
        self.assertEqual(self.response.status_code, 201)
        self.assertEqual(self.response.get_header('X-Other'), 'kept')

    def test_default_response(self):
        bottle.response.bind()
        self.addCleanup(bottle.response.bind)
        self.assertIs(web.xml(), bottle.response)
        self.assertEqual(bottle.response.content_type, 'application/xml')


class TestRedirects(unittest.TestCase):

    def test_permanent_redirect(self):
        response = web.permanent_redirect('/fr/talks')
        self.assertIsInstance(response, bottle.HTTPResponse)
        self.assertEqual(response.status_code, 308)
        self.assertEqual(response.get_header('Location'), '/fr/talks')

    def test_see_other(self):
        response = web.see_other('https://example.com/login')
        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.get_header('Location'),
                         'https://example.com/login')


class TestLocalePrefix(unittest.TestCase):

    def test_english(self):
        self.assertEqual(web.locale_prefix(i18n.ENGLISH), '/en')
        self.assertEqual(web.locale_prefix(i18n.Locale('en', 'GB')), '/en')

    def test_french(self):
        self.assertEqual(web.locale_prefix(i18n.FRENCH), '')

    def test_language_and_tags(self):
        self.assertEqual(web.locale_prefix(Language.ENGLISH), '/en')
        self.assertEqual(web.locale_prefix('en-US'), '/en')
        self.assertEqual(web.locale_prefix('fr'), '')

    def test_localized_path(self):
        self.assertEqual(web.localized_path('/talks', i18n.ENGLISH),
                         '/en/talks')
        self.assertEqual(web.localized_path('talks', i18n.FRENCH), '/talks')
        self.assertEqual(web.localized_path('/', i18n.ENGLISH), '/en/')


class TestConfigure(unittest.TestCase):

    def setUp(self):
        patcher = mock.patch.object(web, 'DEFAULT_LANGUAGE', Language.ENGLISH)
        patcher.start()
        self.addCleanup(patcher.stop)

    @mock.patch.dict(os.environ, {'CONFKIT_DEFAULT_LANGUAGE': 'fr'})
    def test_from_environment(self):
        conf = config.Config(prog='site', options=web.OPTIONS).parse([])
        web.configure(conf)
        self.assertIs(web.DEFAULT_LANGUAGE, Language.FRENCH)

    def test_logs_default(self):
        conf = config.Config.init(default_language='fr')
        with self.assertLogs('confkit.web', level='DEBUG') as logs:
            web.configure(conf)
        self.assertEqual(logs.records[0].data, {'default': 'fr'})

    def test_default(self):
        conf = config.Config(prog='site', options=web.OPTIONS).parse([])
        web.configure(conf)
        self.assertIs(web.DEFAULT_LANGUAGE, Language.ENGLISH)

    def test_unknown(self):
        conf = config.Config.init(default_language='xx')
        with self.assertRaises(exceptions.ConfkitConfigUnknownOption):
            web.configure(conf)


class TestRoutes(unittest.TestCase):

    """Exercise the helpers inside bottle routes."""

    def setUp(self):
        app = bottle.Bottle()
        app.route('/lang', ['GET'], self.current_language)
        app.route('/old', ['GET'], self.moved)
        app.route('/login', ['POST'], self.login)
        app.route('/feed', ['GET'],
                  web.produces(web.APPLICATION_XML)(self.feed))
        app.route('/data', ['GET'], self.data)
        self.app = webtest.TestApp(app)

    @staticmethod
    def current_language():
        return web.language().tag

    @staticmethod
    def moved():
        return web.permanent_redirect(
            web.localized_path('/talks', web.locale()))

    @staticmethod
    def login():
        raise web.see_other('/')

    @staticmethod
    def feed():
        """Return an empty feed."""
        return '<feed/>'

    @staticmethod
    def data():
        web.json()
        return '{"talks": []}'

    def test_language_from_header(self):
        res = self.app.get('/lang',
                           headers={'Accept-Language': 'fr-FR,en;q=0.5'})
        self.assertEqual(res.text, 'fr')

    def test_language_default(self):
        res = self.app.get('/lang')
        self.assertEqual(res.text, 'en')

    def test_permanent_redirect(self):
        res = self.app.get('/old', status=308)
        self.assertTrue(res.headers['Location'].endswith('/en/talks'))

    def test_localized_redirect(self):
        res = self.app.get('/old', headers={'Content-Language': 'fr'},
                           status=308)
        self.assertTrue(res.headers['Location'].endswith('/talks'))
        self.assertNotIn('/en/', res.headers['Location'])

    def test_see_other(self):
        res = self.app.post('/login', status=303)
        self.assertIn('Location', res.headers)

    def test_produces(self):
        res = self.app.get('/feed')
        self.assertEqual(res.content_type, 'application/xml')
        self.assertEqual(res.body, b'<feed/>')

    def test_produces_keeps_metadata(self):
        decorated = web.produces(web.TEXT_HTML)(self.feed)
        self.assertEqual(decorated.__doc__, "Return an empty feed.")

    def test_json(self):
        res = self.app.get('/data')
        self.assertEqual(res.content_type, 'application/json')
        self.assertEqual(res.json, {'talks': []})


if __name__ == '__main__':
    unittest.main()
