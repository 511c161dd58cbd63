# core/io_worker.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
import threading
import queue
import traceback

from hiertable.core.log import Log

def _direct_call(fn, *args):
    fn(*args)

class IOWorker:
    """
    Single background thread for file/IO tasks. Results are handed back via
    `dispatch`, which the GUI sets to wx.CallAfter so callbacks run on the
    main thread. Tasks run strictly one at a time, in submission order.
    """

    def __init__(self, dispatch=None):
        self._dispatch = dispatch or _direct_call
        self._q = queue.Queue()
        self._t = threading.Thread(target=self._run, name="IOWorker", daemon=True)
        self._t.start()

    def submit(self, fn, *args, callback=None, **kwargs):
        """Queue a task; callback(result, error) runs through dispatch."""
        self._q.put((fn, args, kwargs, callback))

    def join(self):
        """Block until every queued task has finished."""
        self._q.join()

    def _run(self):
        """Background thread main loop."""
        while True:
            fn, args, kwargs, cb = self._q.get()
            result = None
            err = None

            try:
                result = fn(*args, **kwargs)
            except Exception as e:
                err = (e, traceback.format_exc())

            try:
                if cb:
                    self._dispatch(cb, result, err)
                elif err is not None:
                    # No callback provided; keep the traceback in the log.
                    Log.debug(err[1], 0)
            except Exception:
                # A failing callback must not kill the worker thread.
                Log.debug(f"IOWorker callback failed:\n{traceback.format_exc()}", 0)
            finally:
                self._q.task_done()
