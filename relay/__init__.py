"""
Portfolio Relay - deploys a user's HTML page to Netlify

Responsibilities:
- Accept a username and an HTML document over HTTP
- Provision a freshly named Netlify site (bounded name-collision retry)
- Bundle the HTML with routing/header files into a zip archive
- Upload the archive as a deploy and return the live URL
"""
