from setuptools import setup, find_packages

setup(
    name="fixed_income_accrual",
    version="0.1.0",
    description="Fixed income accrual engine: CDI/fixed-rate daily compounding with Brazilian IOF/IR taxes",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "pandas",
        "pydantic>=2",
        "pydantic-settings>=2",
        "loguru",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
)
