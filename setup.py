#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import find_packages, setup


# Load the __version__ variable
exec(open('defer/__version__.py').read())


setup_kwargs = {
    'name': "defer",
    'version': __version__,  # noqa
    'description': "Deferred objects, promises and callback lists",
    'long_description': open('README.rst').read(),
    'license': "GPLv3",
    'classifiers': [
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries"
    ],
    'keywords': "deferred promise callbacks async when",
    'packages': find_packages(exclude=['tests', 'tests.*']),
    'install_requires': [
        'appdirs>=1.4',
    ],
    'extras_require': {
        'test': ['pytest', 'tox'],
    },
    'entry_points': {
        "console_scripts": [
            "defer=defer:main"
        ]
    },
    'zip_safe': False,
}


setup(**setup_kwargs)
