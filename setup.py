from setuptools import setup, find_packages

setup(
    name="stkeys",
    version="0.1",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        'pyyaml',
        'numpy',
        'python-dotenv'
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'stkeys=stkeys.main:main',
        ],
    },
)
