from setuptools import setup, find_packages

setup(
    name="homography-dlt",
    version="1.0.0",
    description="Planar homography estimation from point and line correspondences",
    author="homography-dlt contributors",
    packages=find_packages(include=["homography", "homography.*"]),
    install_requires=[
        "opencv-python>=4.8.0",
        "numpy>=1.24.0",
        "scipy>=1.10.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.9",
)
