from setuptools import setup

setup(
   name="dio-poll-console",
   version="0.0.1",
   author="Your Name",
   author_email="your.email@example.com",
   description="Manual output control and input monitoring for a CO3715-1H I/O card over a serial line",
   py_modules=["main", "config", "logging_config"],
   packages=["controller", "model", "utils", "view"],
   python_requires=">=3.8",
   install_requires=[
       "PyQt5",
       "pyserial",
   ],
   extras_require={
       "test": ["pytest"],
   },
   entry_points={
       "gui_scripts": ["dio-poll-console=main:main"],
   },
   zip_safe=False,
)
