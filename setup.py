#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup

readme = open('README.rst').read()
version = (0, 1, 0)

setup(
    name='tactus',
    python_requires=">=3.9",
    version=".".join(map(str, version)),
    description='Rational models of musical rhythm and tempo: proportion trees, meters, tempo interpolation',
    long_description=readme,
    packages=[
        'tactus',
    ],
    install_requires=[
        "numpy",
        "quicktions",
        "typing_extensions",

        # Own libraries
        "emlib>=1.14.1",
        "configdict>=2.10.0",
    ],
    extras_require={
        'test': ['pytest'],
    },
    license="LGPLv2",
    zip_safe=False,
    classifiers=[
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: Multimedia :: Sound/Audio'
    ],
)
