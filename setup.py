# -*- coding: utf-8 -*-

from setuptools import setup, find_packages

setup(
    name='pickem',
    version='0.1.0',
    packages=find_packages(include=['pickem']),
    url='',
    author='',
    author_email='',
    description='NFL pick\'em pools - survivor elimination and confidence scoring',
    python_requires='>=3.10',
    install_requires=['regex',
                      'pyyaml',
                      'peewee'],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'team     = pickem.team:main',
            'pool     = pickem.pool:main',
            'store    = pickem.store:main',
            'db_admin = pickem.db_admin:main'
        ],
    }
)
