""" Lets the test modules import ``example.*`` from the project root, as they do under ``python -m unittest``. """
