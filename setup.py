from setuptools import setup, find_packages

dev_requires = ['flake8']
test_requires = ['pytest']
install_requires = []

setup(
    author="Grahame Bowland",
    author_email="grahame@angrygoats.net",
    description="assign municipal council seats to political groups as required by the Dutch Elections Act (Kieswet), chapter P",
    license="Apache2",
    keywords="apportionment seats kieswet voting",
    name="zetelverdeling",
    version="0.1.0",
    packages=find_packages(exclude=["*.tests", "*.tests.*", "tests.*", "tests"]),
    extras_require={
        'dev': dev_requires,
        'test': test_requires,
    },
    install_requires=install_requires,
    entry_points={
        'console_scripts': [
            'zetelverdeling = zetelverdeling.cli:main',
        ],
    }
)
