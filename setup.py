#!/usr/bin/env python


"""
Setup script for journey-segment
"""


import codecs
import os

from setuptools import find_packages
from setuptools import setup


with codecs.open('README.rst', encoding='utf-8') as f:
    readme = f.read().strip()


version = None
author = None
email = None
source = None
with open(os.path.join('journey_segment', '__init__.py')) as f:
    for line in f:
        if line.strip().startswith('__version__'):
            version = line.split('=')[1].strip().replace('"', '').replace("'", '')
        elif line.strip().startswith('__author__'):
            author = line.split('=')[1].strip().replace('"', '').replace("'", '')
        elif line.strip().startswith('__email__'):
            email = line.split('=')[1].strip().replace('"', '').replace("'", '')
        elif line.strip().startswith('__source__'):
            source = line.split('=')[1].strip().replace('"', '').replace("'", '')
        elif None not in (version, author, email, source):
            break


setup(
    author=author,
    author_email=email,
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: Apache Software License',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering',
        'Topic :: Scientific/Engineering :: GIS',
        'Topic :: Scientific/Engineering :: Information Analysis',
        'Topic :: Utilities',
    ],
    description="Reconstruct vessel journeys and activity intervals from "
                "navigational telemetry exports.",
    entry_points='''
        [console_scripts]
        journey-segment=journey_segment.cli:segment
    ''',
    extras_require={
        'dev': [
            'pytest>=3.6',
            'pytest-cov',
            'coverage'
        ]
    },
    include_package_data=True,
    install_requires=[
        'click>=7.0',
        'pyproj>=3.0',
        'newlinejson',
        'python-dateutil'
    ],
    keywords='AIS GIS vessel journeys telemetry',
    license="Apache 2.0",
    long_description=readme,
    name='journey-segment',
    packages=find_packages(exclude=['test*.*', 'tests']),
    python_requires='>=3.7',
    url=source,
    version=version,
    zip_safe=True
)
