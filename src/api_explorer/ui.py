from __future__ import annotations

EXPLORER_HTML = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>API Documentation</title>
  <style>
    :root {
      --bg: #f5f7fb;
      --panel: #ffffff;
      --text: #162334;
      --muted: #5d6f84;
      --border: #d6dce5;
      --accent: #1653b5;
      --ok: #0f7a42;
      --warn: #9a5b00;
      --err: #b82727;
      --neutral: #6b7280;
    }

    * {
      box-sizing: border-box;
    }

    body {
      margin: 0;
      padding: 2rem 1rem;
      background: var(--bg);
      color: var(--text);
      font-family: "IBM Plex Sans", "Segoe UI", Arial, sans-serif;
      line-height: 1.45;
    }

    .wrap {
      max-width: 960px;
      margin: 0 auto;
    }

    header {
      margin-bottom: 2.5rem;
      text-align: center;
    }

    header h1 {
      margin: 0;
      font-size: 2.75rem;
      color: var(--accent);
    }

    header p {
      margin: 0.75rem 0 0;
      color: var(--muted);
    }

    .list {
      display: grid;
      gap: 2rem;
    }

    .card {
      background: var(--panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 1rem 1.25rem;
      box-shadow: 0 4px 14px rgba(22, 35, 52, 0.08);
    }

    .card-head {
      display: flex;
      align-items: center;
      gap: 1rem;
    }

    .badge {
      padding: 0.15rem 0.6rem;
      border-radius: 6px;
      color: #fff;
      font-weight: 700;
      font-size: 0.85rem;
      background: var(--neutral);
    }

    .badge.GET { background: #3b82f6; }
    .badge.POST { background: #22c55e; }
    .badge.DELETE { background: #ef4444; }

    code.path {
      font-size: 1.1rem;
    }

    .description {
      color: var(--muted);
      margin: 0.5rem 0 1rem;
    }

    .params {
      display: grid;
      gap: 0.5rem;
      margin-bottom: 1rem;
    }

    .params input {
      font-family: monospace;
      padding: 0.4rem 0.6rem;
      border: 1px solid var(--border);
      border-radius: 6px;
    }

    button {
      background: var(--accent);
      color: #fff;
      border: 0;
      border-radius: 6px;
      padding: 0.5rem 1rem;
      cursor: pointer;
    }

    button:disabled {
      opacity: 0.6;
      cursor: progress;
    }

    .status {
      display: inline-block;
      padding: 0.1rem 0.55rem;
      border-radius: 999px;
      color: #fff;
      font-size: 0.75rem;
      background: var(--neutral);
    }

    .status.success { background: var(--ok); }
    .status.client-error { background: var(--warn); }
    .status.server-error { background: var(--err); }

    pre {
      margin: 0.5rem 0 0;
      padding: 1rem;
      border-radius: 8px;
      background: #eef1f6;
      overflow-x: auto;
      font-size: 0.85rem;
    }

    .outcome.error h4,
    .outcome.error pre {
      color: var(--err);
    }

    .skeleton {
      height: 12rem;
      border-radius: 12px;
      background: linear-gradient(90deg, #e5e9f0, #f2f4f8, #e5e9f0);
    }

    .page-error {
      text-align: center;
      color: var(--err);
    }

    .page-error p {
      color: var(--muted);
    }
  </style>
</head>
<body>
  <div class="wrap">
    <header>
      <h1>API Documentation</h1>
      <p>Explore and test the API endpoints.</p>
    </header>
    <div id="list" class="list"></div>
  </div>
  <script>
    (function () {
      const listEl = document.getElementById("list");
      let viewId = null;

      function escapeHtml(value) {
        return String(value)
          .replace(/&/g, "&amp;")
          .replace(/</g, "&lt;")
          .replace(/>/g, "&gt;")
          .replace(/"/g, "&quot;");
      }

      function renderSkeletons() {
        listEl.innerHTML = "";
        for (let i = 0; i < 5; i += 1) {
          const el = document.createElement("div");
          el.className = "skeleton";
          listEl.appendChild(el);
        }
      }

      function renderPageError(message) {
        listEl.innerHTML =
          '<div class="page-error"><h2>Oops! Something went wrong.</h2><p>' +
          escapeHtml(message) +
          "</p></div>";
      }

      function renderOutcome(kind, outcome) {
        if (!outcome) {
          return "";
        }
        const label = outcome.status || (kind === "error" ? "Client Error" : "");
        return (
          '<div class="outcome ' + kind + '">' +
          "<h4>" + (kind === "error" ? "Error" : "Response") + "</h4>" +
          '<span class="status ' + escapeHtml(outcome.category) + '">' + escapeHtml(label) + "</span>" +
          "<pre><code>" + escapeHtml(JSON.stringify(outcome.data, null, 2)) + "</code></pre>" +
          "</div>"
        );
      }

      function renderCard(index, endpoint) {
        const card = document.createElement("div");
        card.className = "card";
        const inputs = endpoint.params
          .map(function (name) {
            return '<input data-param="' + escapeHtml(name) + '" placeholder="' + escapeHtml(name) + '">';
          })
          .join("");
        card.innerHTML =
          '<div class="card-head">' +
          '<span class="badge ' + escapeHtml(endpoint.badge) + '">' + escapeHtml(endpoint.badge) + "</span>" +
          '<code class="path">' + escapeHtml(endpoint.path) + "</code>" +
          "</div>" +
          '<p class="description">' + escapeHtml(endpoint.description) + "</p>" +
          (endpoint.params.length ? '<div class="params"><h4>Parameters</h4>' + inputs + "</div>" : "") +
          "<button>Send Request</button>" +
          '<div class="outcomes"></div>';

        const button = card.querySelector("button");
        const outcomesEl = card.querySelector(".outcomes");
        button.addEventListener("click", async function () {
          const params = {};
          card.querySelectorAll("input[data-param]").forEach(function (input) {
            params[input.dataset.param] = input.value;
          });
          button.disabled = true;
          button.textContent = "Sending...";
          outcomesEl.innerHTML = "";
          try {
            const res = await fetch("api/views/" + viewId + "/endpoints/" + index + "/invoke", {
              method: "POST",
              headers: { "Content-Type": "application/json" },
              body: JSON.stringify({ params: params })
            });
            const payload = await res.json();
            if (!res.ok) {
              outcomesEl.innerHTML = renderOutcome("error", {
                status: res.status,
                category: "unknown",
                data: payload
              });
              return;
            }
            outcomesEl.innerHTML =
              renderOutcome("result", payload.state.result) + renderOutcome("error", payload.state.error);
          } catch (err) {
            outcomesEl.innerHTML = renderOutcome("error", {
              status: null,
              category: "unknown",
              data: { message: err.message }
            });
          } finally {
            button.disabled = false;
            button.textContent = "Send Request";
          }
        });
        return card;
      }

      async function mount() {
        renderSkeletons();
        try {
          const res = await fetch("api/endpoints");
          const payload = await res.json();
          if (!res.ok) {
            renderPageError(payload.error || "Failed to load API documentation.");
            return;
          }
          viewId = payload.view;
          listEl.innerHTML = "";
          payload.endpoints.forEach(function (endpoint, index) {
            listEl.appendChild(renderCard(index, endpoint));
          });
        } catch (err) {
          renderPageError("Failed to load API documentation.");
        }
      }

      window.addEventListener("pagehide", function () {
        if (viewId) {
          fetch("api/views/" + viewId, { method: "DELETE", keepalive: true });
        }
      });

      mount();
    })();
  </script>
</body>
</html>
"""
