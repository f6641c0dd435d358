"""Canned root pages.

Both pages route every console call through the ``on_console_<level>`` hooks
that ``run.js`` installs. The headless page also copies the output into
``<pre>`` elements so a driver without a console can scrape it.
"""

INDEX_HTML = """<!DOCTYPE html>
<html>
  <head>
    <meta content="text/html;charset=utf-8" http-equiv="Content-Type"/>
  </head>
  <body>
    <pre id="output">Loading scripts...</pre>
    <script>
      const wrap = method => {
        const og = console[method];
        const on_method = `on_console_${method}`;
        console[method] = function (...args) {
          og.apply(this, args);
          if (window[on_method]) {
            window[on_method](args);
          }
        };
      };

      wrap("debug");
      wrap("log");
      wrap("info");
      wrap("warn");
      wrap("error");
    </script>
    <script src="run.js" type="module"></script>
  </body>
</html>
"""

INDEX_HEADLESS_HTML = """<!DOCTYPE html>
<html>
  <head>
    <meta content="text/html;charset=utf-8" http-equiv="Content-Type"/>
  </head>
  <body>
    <pre id="output">Loading scripts...</pre>
    <pre id="console_debug"></pre>
    <pre id="console_log"></pre>
    <pre id="console_info"></pre>
    <pre id="console_warn"></pre>
    <pre id="console_error"></pre>
    <script>
      const logs = method => document.getElementById(`console_${method}`);

      const wrap = method => {
        const on_method = `on_console_${method}`;
        console[method] = function (...args) {
          if (window[on_method]) {
            window[on_method](args);
          }
          logs(method).textContent += args.join(" ") + "\\n";
        };
      };

      wrap("debug");
      wrap("log");
      wrap("info");
      wrap("warn");
      wrap("error");

      window.addEventListener("error", e => {
        logs("error").textContent += `${e.message}\\n`;
      });
      window.addEventListener("unhandledrejection", e => {
        logs("error").textContent += `${e.reason}\\n`;
      });
    </script>
    <script src="run.js" type="module"></script>
  </body>
</html>
"""


def root_page(headless: bool) -> str:
    return INDEX_HEADLESS_HTML if headless else INDEX_HTML
