#!/usr/bin/env python

import re
from os import path
from setuptools import setup, find_packages


requirements = [
    'sanic>=21.12',
    'werkzeug>=2.3',
    'orjson>=3.0',
]

with open("README.md", "r") as fh:
    long_description = fh.read()

version_file = path.join(
    path.dirname(__file__),
    'sanic_accept',
    '__version__.py'
)
with open(version_file, 'r') as fp:
    m = re.search(
        r"^__version__ = ['\"]([^'\"]*)['\"]",
        fp.read(),
        re.M
    )
    version = m.groups(1)[0]


setup(
    name='sanic-accept',
    version=version,
    license='MIT',
    description='Accept header parsing and content negotiation for Sanic',
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=['tests', 'tests.*']),
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
    ],
    zip_safe=False,
    include_package_data=True,
    platforms='any',
    python_requires='>=3.8',
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
)
