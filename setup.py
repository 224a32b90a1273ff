"""Turns raw log lines into structured records and epoch timestamps.
Built-in support for apache, nginx, syslog, JSON, CSV, TSV, and LTSV
lines, plus inline or registered named-group patterns.

BSD-licensed.
"""

import sys
from setuptools import setup, find_packages


__version__ = '0.1.0dev'
__license__ = 'BSD'

desc = ('Per-line log parsing into structured records, with cached'
        ' timestamp extraction.')


if sys.version_info < (3, 7):
    raise NotImplementedError("Sorry, textparser only supports Python >=3.7")


setup(name='textparser',
      version=__version__,
      description=desc,
      long_description=__doc__,
      packages=find_packages(),
      install_requires=['boltons>=20.0.0',
                        'python-dateutil>=2.8.0'],
      extras_require={'test': ['pytest']},
      include_package_data=True,
      zip_safe=False,
      license=__license__,
      platforms='any',
      classifiers=[
          'Intended Audience :: Developers',
          'Topic :: System :: Logging',
          'Topic :: Text Processing',
          'Topic :: Utilities',
          'License :: OSI Approved :: BSD License',
          'Programming Language :: Python :: 3',
          'Programming Language :: Python :: Implementation :: CPython',
          'Programming Language :: Python :: Implementation :: PyPy',
      ]
)
