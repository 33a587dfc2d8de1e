#!/usr/bin/env python3
"""
Self-Healing Demo

Logs in to a small login form through the self-healing resolver, then
swaps in a redesigned form (new ids, classes and button text) and logs
in again with the same element registry. Every strategy outcome is
recorded in the selector ledger.

Usage:
    python demo_self_healing.py [--headed] [--history-dir DIR]

Examples:
    python demo_self_healing.py
    python demo_self_healing.py --headed --history-dir /tmp/selector_history
"""

import argparse
import asyncio
import logging
import sys

from playwright.async_api import async_playwright

from selfheal import (
    ResolutionExhausted,
    ResolverConfig,
    SelectorLearner,
    SelfHealingResolver,
    configure_logging,
)

logger = logging.getLogger("demo_self_healing")


ORIGINAL_FORM = """
<html>
  <body>
    <form id="login-form" onsubmit="event.preventDefault();
        document.getElementById('login-form').style.display='none';
        document.getElementById('dashboard').style.display='block';">
      <h2>Login</h2>
      <label for="username">Username</label>
      <input type="email" id="username" name="username" placeholder="Email address" data-testid="username-input">
      <label for="password">Password</label>
      <input type="password" id="password" name="password" placeholder="Password" data-testid="password-input">
      <button type="submit" data-testid="login-submit">Sign In</button>
    </form>
    <div id="dashboard" style="display: none;">
      <h2>Dashboard</h2>
      <p class="welcome-message">Welcome, User!</p>
      <button class="logout">Logout</button>
    </div>
  </body>
</html>
"""

# IDs, classes, test ids and button text have all changed
REDESIGNED_FORM = """
<html>
  <body>
    <form id="auth-form" class="login-form" onsubmit="event.preventDefault();
        document.getElementById('auth-form').style.display='none';
        document.getElementById('user-dashboard').style.display='block';">
      <h2>Sign in to your account</h2>
      <label for="email">Email Address</label>
      <input type="email" id="email" name="email" placeholder="Enter your email">
      <label for="user-password">Password</label>
      <input type="password" id="user-password" name="password" placeholder="Enter your password">
      <button type="submit" class="login-button">Login</button>
    </form>
    <div id="user-dashboard" style="display: none;">
      <h2>User Dashboard</h2>
      <p>Welcome back! You are now signed in.</p>
      <button class="sign-out-button">Sign Out</button>
    </div>
  </body>
</html>
"""


async def log_in(resolver: SelfHealingResolver, dashboard_selector: str) -> bool:
    """Fill the form and submit it, returning whether the dashboard appeared"""
    await resolver.fill("usernameField", "user@example.com")
    await resolver.fill("passwordField", "secure-password-123")
    await resolver.click("submitButton")
    return await resolver.page.locator(dashboard_selector).is_visible()


async def run_demo(headed: bool, config: ResolverConfig) -> bool:
    learner = SelectorLearner.from_config(config)
    learner.load_history()

    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=not headed)
        try:
            page = await browser.new_page()
            resolver = SelfHealingResolver(page=page, learner=learner, config=config)

            logger.info("Step 1: logging in to the original form")
            await page.set_content(ORIGINAL_FORM)
            first = await log_in(resolver, "#dashboard")
            logger.info(f"Login successful: {'yes' if first else 'no'}")

            await learner.learn_new_selectors(page, "submitButton", '[data-testid="login-submit"]')

            logger.info("Step 2: logging in to the redesigned form")
            await page.set_content(REDESIGNED_FORM)
            second = await log_in(resolver, "#user-dashboard")
            logger.info(f"Login successful after UI changes: {'yes' if second else 'no'}")
        finally:
            await browser.close()

    for element in ("usernameField", "passwordField", "submitButton"):
        logger.info(f"{element}: best selector {learner.get_best_selector(element)!r}")

    return first and second


def main():
    parser = argparse.ArgumentParser(description="Demonstrate self-healing element resolution")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("--history-dir", help="Directory for the selector ledger")
    args = parser.parse_args()

    config = ResolverConfig.from_env()
    if args.history_dir:
        config.history_dir = args.history_dir
    configure_logging(config.log_level)

    try:
        healed = asyncio.run(run_demo(args.headed, config))
    except ResolutionExhausted as e:
        logger.error(str(e))
        sys.exit(1)

    sys.exit(0 if healed else 1)


if __name__ == "__main__":
    main()
