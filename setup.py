from setuptools import find_packages, setup

setup(
    name="github-labeler",
    version="0.1.0",
    license="Apache License 2.0",

    python_requires=">=3.10",
    description="Reconciles the labels of GitHub repositories with their "
                "desired state as declared in a labels manifest.",

    packages=find_packages(exclude=('tests',)),
    package_data={'labeler': ['test/fixtures/*/*.yaml']},

    install_requires=[
        "Click>=8.0,<9.0",
        "PyGithub>=2.1,<3.0",
        "pydantic>=2.0,<3.0",
        "requests>=2.22",
        "ruamel.yaml>=0.17.22,<0.19.0",
        "sentry-sdk>=1.0,<3.0",
        "toml>=0.10.0,<0.11.0",
    ],

    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-mock>=3.10",
        ],
    },

    test_suite="labeler.test",

    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
    ],
    entry_points={
        'console_scripts': [
            'github-labeler = labeler.cli:root',
        ],
    },
)
