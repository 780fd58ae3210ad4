from setuptools import setup, find_packages

setup(
    name="kcadmin-cli",
    version="0.1.0",
    description="Client and CLI for user group memberships via the identity server admin API",
    packages=find_packages(include=["kcadmin_cli", "kcadmin_cli.*"]),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=["InquirerPy", "tqdm"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "kcadmin=kcadmin_cli.__main__:main",
        ]
    },
)
