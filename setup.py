from setuptools import setup, find_packages

setup(
    name='firecalc',
    version='0.1.0',
    packages=find_packages(exclude=['firecalc.tests', 'firecalc.tests.*']),
    package_data={
        'firecalc.models': ['data/*.json'],
    },
    install_requires=[
        'numpy',
        'shapely',
    ],
    extras_require={
        'dev': [
            'pytest>=7.0',
            'pytest-cov>=4.0',
            'ruff>=0.1.0',
        ],
    },
    python_requires='>=3.9',
)
