from glob import glob
from setuptools import setup


setup(
    name='maths',
    use_scm_version={
        'fallback_version': '0.1.0',
    },
    description='Infix calculator for the command line',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    python_requires='>=3.11',
    packages=['maths'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    setup_requires=[
        'setuptools_scm',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
            'mypy',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
