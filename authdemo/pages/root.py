"""Server-rendered HTML: landing page and the always-public policy pages."""

from html import escape

_STYLE = """
    body { font-family: system-ui, sans-serif; margin: 0; background: #fafafa; color: #222; }
    main { max-width: 560px; margin: 4rem auto; padding: 0 1rem; }
    h1 { font-size: 1.9rem; margin: 0 0 0.5rem; }
    .card { background: #fff; border: 1px solid #e4e4e4; padding: 1.25rem 1.5rem; margin: 1.25rem 0; }
    .card h2 { font-size: 0.8rem; text-transform: uppercase; letter-spacing: 0.06em; color: #777; margin: 0 0 0.75rem; }
    code { font-family: ui-monospace, monospace; font-size: 0.85rem; }
    ul { padding-left: 1.2rem; margin: 0; }
    li { margin: 0.25rem 0; }
    a { color: #2457c5; }
    footer { margin-top: 2rem; color: #999; font-size: 0.8rem; text-align: center; }
"""


def _page(title: str, body: str, app_name: str) -> str:
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
    <style>{_STYLE}</style>
</head>
<body>
    <main>
{body}
        <footer>{escape(app_name)} &middot;
            <a href="/privacy-policy">Privacy policy</a> &middot;
            <a href="/data-deletion">Data deletion</a>
        </footer>
    </main>
</body>
</html>
""".strip()


def render_root_page(app_name: str) -> str:
    """Landing page: what the service offers and where the API lives."""
    body = """
        <h1>Welcome to Auth Demo</h1>
        <p>Sign up with email and password, Google or Facebook, verify your email,
        then manage your profile and settings.</p>
        <section class="card">
            <h2>Your account</h2>
            <ul>
                <li><code>GET /api/me</code> &mdash; who you are and your role</li>
                <li><code>GET|PUT /api/me/profile</code> &mdash; profile page</li>
                <li><code>PATCH /api/me/settings</code> &mdash; settings page</li>
            </ul>
        </section>
        <section class="card">
            <h2>Administrators</h2>
            <ul>
                <li><code>GET /api/admin/users</code></li>
                <li><code>POST /api/admin/disableUser?userId=&hellip;</code></li>
                <li><code>POST /api/admin/enableUser?userId=&hellip;</code></li>
                <li><code>DELETE /api/admin/deleteUser?userId=&hellip;</code></li>
            </ul>
            <p>All calls take <code>Authorization: Bearer &lt;Firebase ID token&gt;</code>.</p>
        </section>
        <p><a href="/docs">API docs (Swagger)</a> &middot; <a href="/redoc">ReDoc</a></p>"""
    return _page(app_name, body, app_name)


def render_privacy_policy(app_name: str) -> str:
    body = """
        <h1>Privacy policy</h1>
        <section class="card">
            <p>We store your email address, display name and sign-in provider with
            Firebase Authentication, and the profile and settings you enter in
            Cloud Firestore. Nothing is shared with third parties.</p>
            <p>Signing in with Google or Facebook shares your name and email address
            from that provider with us.</p>
        </section>"""
    return _page(f"{app_name} - Privacy policy", body, app_name)


def render_data_deletion(app_name: str) -> str:
    body = """
        <h1>Data deletion</h1>
        <section class="card">
            <p>You can delete your account from the settings page. This removes your
            role record and your sign-in identity.</p>
            <p>If you can no longer sign in, ask an administrator to delete your
            account for you.</p>
        </section>"""
    return _page(f"{app_name} - Data deletion", body, app_name)
