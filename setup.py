#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""The setup script."""

from setuptools import setup, find_packages

with open('README.rst') as readme_file:
    readme = readme_file.read()

with open('HISTORY.rst') as history_file:
    history = history_file.read()

requirements = ['Click>=7.0',
                'python-dotenv',
                'requests',
                'pandas',
                'python-dateutil',
                ]

test_requirements = ['pytest']


setup(
    author="Michael Dereszynski",
    author_email='mlderes@hotmail.com',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Environment :: Console',
    ],
    description="Current weather and the most dramatic change in the next few hours, described in plain words",
    entry_points={
        'console_scripts': [
            '8bw=eightbit_weather.cli:main',
            '8bw-describe=eightbit_weather.cli:describe',
            '8bw-demo=eightbit_weather.cli:demo_mode',
        ],
    },
    install_requires=requirements,
    extras_require={'test': test_requirements},
    license="GNU General Public License v3",
    long_description=readme + '\n\n' + history,
    include_package_data=True,
    keywords='eightbit_weather',
    name='eightbit_weather',
    packages=find_packages(include=['eightbit_weather']),
    python_requires='>=3.8',
    test_suite='tests',
    tests_require=test_requirements,
    url='https://github.com/mlderes/eightbit_weather',
    version='0.1.0',
    zip_safe=False,
)
