from setuptools import setup, find_packages

setup(
    name="meanforce",
    version="0.1.0",
    description="Mean restraint force and torque between two identical subunits from MD force trajectories",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy",
        "matplotlib",
        "pyyaml",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'meanforce=meanforce.cli:main',
        ],
    },
    python_requires=">=3.8",
)
