#!/usr/bin/env python3
#
# Copyright 2022 Max Planck Insitute Magdeburg
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
#
"""Process pool for parallel flux variability analysis

FluxPool always spawns fresh worker processes. On Windows, initialization code is
handed to the workers through a pickle file instead of directly, which avoids a
severe start-up penalty there (see https://github.com/opencobra/cobrapy/issues/997).
"""

from multiprocessing import get_context
from multiprocessing.pool import Pool
from os.path import isfile
from platform import system
from tempfile import mkstemp
from typing import Callable, Optional, Tuple
import os
import pickle
import sys


def _init_from_file(filename: str) -> None:
    """Load the worker initializer and its arguments from a pickle file and call it"""
    with open(filename, mode="rb") as handle:
        func, *args = pickle.load(handle)
    func(*args)


def _detach_main() -> Tuple:
    """Hide __spec__ and __file__ of the main module from multiprocessing

    Spawned workers would otherwise re-import the calling script."""
    main = sys.modules['__main__']
    spec = getattr(main, '__spec__', None)
    file = getattr(main, '__file__', None)
    if spec:
        main.__spec__ = None
    if file:
        main.__file__ = None
    return spec, file


def _restore_main(spec, file) -> None:
    main = sys.modules['__main__']
    if spec:
        main.__spec__ = spec
    if file:
        main.__file__ = file


class FluxPool(Pool):
    """Spawning process pool with a fast start on Windows
    
    Example:
        with FluxPool(4, initializer=fva_worker_init, initargs=(model, 'glpk', None)) as pool:
            for chunk in pool.imap_unordered(fva_worker_compute, chunks):
                ...
    
    Args:
        processes (optional (int)):
            Number of worker processes.
            
        initializer (optional (callable)), initargs (tuple):
            Called once in every worker with initargs.
            
        maxtasksperchild (optional (int)):
            Passed on to multiprocessing.pool.Pool.
    """

    def __init__(self,
                 processes: Optional[int] = None,
                 initializer: Optional[Callable] = None,
                 initargs: Tuple = (),
                 maxtasksperchild: Optional[int] = None):
        self._filename = None
        if initializer is not None and system() == "Windows":
            descriptor, self._filename = mkstemp(suffix=".pkl")
            # write through the descriptor of mkstemp so the file is closed and can be removed later
            with os.fdopen(descriptor, mode="wb") as handle:
                pickle.dump((initializer,) + tuple(initargs), handle)
            initializer = _init_from_file
            initargs = (self._filename,)
        spec, file = _detach_main()
        try:
            super().__init__(
                processes=processes,
                initializer=initializer,
                initargs=initargs,
                maxtasksperchild=maxtasksperchild,
                context=get_context('spawn'),
            )
        finally:
            _restore_main(spec, file)

    def __exit__(self, *args, **kwargs):
        """Remove the pickle file and terminate the workers"""
        self._clean_up()
        super().__exit__(*args, **kwargs)

    def close(self):
        self._clean_up()
        super().close()

    def _clean_up(self):
        if self._filename is not None and isfile(self._filename):
            os.remove(self._filename)
