import setuptools


if __name__ == "__main__":
    setuptools.setup(
        name="git-pushcheck",
        version="0.1.0",
        description="Check whether the checked-out commit has been pushed to a remote.",
        packages=["pushcheck"],
        python_requires=">=3.8",
        install_requires=["pygit2", "colorama>=0.4.6", "typing_extensions"],
        extras_require={"test": ["pytest", "py"]},
        entry_points={
            "console_scripts": ["git-pushcheck = pushcheck.__main__:entry_point"]
        },
    )
