from setuptools import setup

requirements = [
    'arsenal',
    'graphviz',
]


setup(
    name='textfst',
    version='0.1',
    description='Weighted finite-state transducers for small text transformations',
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.10',
    readme='',
    scripts=[],
    packages=['textfst'],
    entry_points={
        'console_scripts': ['textfst = textfst.cli:main'],
    },
)
