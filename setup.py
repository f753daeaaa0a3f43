"""Install the blog admin API."""

from setuptools import setup, find_packages

setup(
    name='admin-api',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    py_modules=['wsgi'],
    install_requires=[
        "flask>=2.3",
        "werkzeug",
        "flask-sqlalchemy>=3.0",
        "sqlalchemy>=1.4",
        "pytz",
        "python-json-logger",
        "click",
        "pyjwt>=2.0"
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis"
        ]
    },
    entry_points={
        "console_scripts": ["admin-api=admin_api.cli:main"]
    },
    zip_safe=False
)
