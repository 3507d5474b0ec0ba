from setuptools import setup, find_packages

setup(
    name='msgdb',
    version='1.0.0',
    packages=find_packages(include=['msgdb', 'msgdb.*']),
    entry_points={
        'console_scripts': [
            'msgdb-server=msgdb.cli.server_cli:main',
            'msgdb=msgdb.cli.client_cli:main',
        ],
    },
    extras_require={
        'test': ['pytest', 'pytest-asyncio'],
    },
    python_requires='>=3.8',
)
