"""Selenium helpers for checking what the Jira UI renders."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from selenium import webdriver
from selenium.webdriver.common.by import By
from selenium.webdriver.firefox.options import Options
from selenium.webdriver.remote.webdriver import WebDriver

from condec_systest.config import Config

logger = logging.getLogger(__name__)

IMPLICIT_WAIT_SECONDS = 10


def open_firefox(profile_path: str = "", headless: bool = False) -> WebDriver:
    """Start Firefox (via geckodriver), logged in through the given profile."""
    options = Options()
    if profile_path:
        options.add_argument("-profile")
        options.add_argument(profile_path)
    if headless:
        options.add_argument("-headless")
    driver = webdriver.Firefox(options=options)
    driver.implicitly_wait(IMPLICIT_WAIT_SECONDS)
    return driver


@contextmanager
def firefox_session(config: Config, headless: bool = False) -> Iterator[WebDriver]:
    """Yield a Firefox driver for the configured profile and always quit it."""
    driver = open_firefox(config.firefox_profile_path, headless=headless)
    try:
        yield driver
    finally:
        driver.quit()


def issue_type_label(driver: WebDriver, jira_url: str, issue_key: str) -> str:
    """The issue type shown on the issue page."""
    driver.get(f"{jira_url}/browse/{issue_key}")
    return driver.find_element(By.ID, "type-val").text.strip()


def comment_icon_sources(
    driver: WebDriver, jira_url: str, issue_key: str, comment_id: str | int
) -> list[str]:
    """The src of every knowledge icon rendered in a comment, in document order."""
    driver.get(f"{jira_url}/browse/{issue_key}?focusedCommentId={comment_id}")
    # The comment markup is generated from its id
    images = driver.find_elements(By.XPATH, f"//*[@id='comment-{comment_id}']//div/p/img")
    sources = [img.get_attribute("src") or "" for img in images]
    logger.debug(f"Comment {comment_id} on {issue_key} renders {len(sources)} icons")
    return sources
