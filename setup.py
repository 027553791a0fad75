# -*- coding: utf-8 -*-
import codecs
from setuptools import setup, find_packages


tests_require = [
    'pytest>=6.0',
]

setup(
    name='Asana-Resources',
    version='0.1.0',
    packages=find_packages(exclude=['*tests*']),
    url='https://developers.asana.com/docs',
    license='MIT',
    description='Typed resource layer and stub API for the Asana REST API',
    long_description=codecs.open('README.rst', encoding='utf-8').read(),
    tests_require=tests_require,
    python_requires='>=3.8',
    install_requires=[
        'Flask>=2.2',
        'Werkzeug>=2.2',
        'jsonschema>=3.0',
        'aniso8601>=0.84',
        'blinker>=1.3',
        'requests>=2.20',
        'rfc3987',
        'strict-rfc3339'
    ],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Software Development :: Libraries :: Python Modules'
    ],
    zip_safe=False,
    extras_require={
        'tests': tests_require,
    }
)
