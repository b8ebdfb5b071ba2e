# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Package attributes and metadata."""

__all__ = (
    '__title__',
    '__summary__',
    '__url__',
    '__version__',
    '__author__',
    '__email__',
    '__license__',
    '__copyright__',
    '__keywords__',
)


__title__ = 'confkit'
__summary__ = ('confkit is a collection of locale, date and text helpers '
               'for bilingual bottle web sites')
__url__ = 'https://github.com/confkit/confkit'
__version__ = '0.1.0'
__author__ = 'Rackers'
__email__ = 'samuel.stavinoha@rackspace.com'
__keywords__ = ['i18n', 'locale', 'slug', 'bottle']
__license__ = 'Apache License, Version 2.0'
__copyright__ = 'Copyright Rackspace US, Inc. (c) 2014-2015'
