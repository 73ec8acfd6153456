"""Network functions to retrieve captured test logs
"""

import functools
import io
import logging
import time
from typing import Callable, Optional, Type

import requests
from requests import adapters

import gotestparse
from gotestparse import config


RequestException = requests.exceptions.RequestException

# The User-Agent: header to use
USER_AGENT = f'gotestparse/{gotestparse.__version__}'


class Session(requests.Session):
    """Set up a requests session with a standard configuration"""

    def __init__(self, total: Optional[int] = None, backoff_factor: Optional[float] = None,
                 status_forcelist: Optional[list[int]] = None,
                 allowed_methods: Optional[list[str]] = None):
        super().__init__()
        if total is None:
            total = config.get('download_retries')
        if backoff_factor is None:
            backoff_factor = config.get('download_backoff_factor')
        if not status_forcelist:
            status_forcelist = [429, 500, 502, 503, 504]
        if not allowed_methods:
            allowed_methods = ['HEAD', 'GET', 'OPTIONS']

        retry_strategy = adapters.Retry(
            total=total, backoff_factor=backoff_factor, status_forcelist=status_forcelist,
            allowed_methods=allowed_methods)
        adapter = adapters.HTTPAdapter(max_retries=retry_strategy)
        self.mount('https://', adapter)
        self.mount('http://', adapter)
        self.headers['User-Agent'] = USER_AGENT


def retry_on_exception(func: Callable, exception: Type[Exception],
                       retries: int = 10, delay: float = 10):
    """Retry a function call on an exception, with fixed delay"""
    for attempt in range(1, retries + 1):
        try:
            return func()
        except exception:
            if attempt == retries:
                raise
            logging.info(f'Download attempt {attempt} failed; retrying after delay')
            time.sleep(delay)
    raise ValueError('retries must be at least 1')


def fetch_log_onetry(session: requests.Session, url: str) -> str:
    """Retrieve the whole text of the log at the URL"""
    resp = session.get(url, timeout=config.get('download_timeout'))
    resp.raise_for_status()
    if not resp.encoding:
        resp.encoding = 'utf-8'
    return resp.text


def fetch_log(url: str, session: Optional[requests.Session] = None) -> io.StringIO:
    """Retrieve a captured test log, retrying a few times in case of errors, if necessary

    Returns: the log contents as a file object
    """
    if not session:
        session = Session()
    logging.info('Retrieving log from %s', url)
    text = retry_on_exception(functools.partial(fetch_log_onetry, session, url),
                              requests.exceptions.ChunkedEncodingError,
                              retries=max(config.get('download_retries'), 1),
                              delay=config.get('download_backoff_factor'))
    return io.StringIO(text)
