"""CSS styles for minimaxviz HTML export."""

CSS = """
:root {
    --ink: #1f2328;
    --paper: #ffffff;
    --rule: #d0d7de;
    --faint: #656d76;
    --max-fg: #1a7f37;
    --max-bg: #dafbe1;
    --min-fg: #0969da;
    --min-bg: #ddf4ff;
    --cut: #cf222e;
    --aside: 16rem;
}

html {
    font: 15px/1.5 system-ui, sans-serif;
    color: var(--ink);
    background: #f6f8fa;
}

body {
    margin: 0;
}

header {
    padding: 1.25rem 2rem;
    background: var(--ink);
    color: var(--paper);
}

header h1 {
    margin: 0;
    font-size: 1.5rem;
}

header .subtitle {
    margin: 0.25rem 0 0;
    color: #afb8c1;
    font-family: ui-monospace, monospace;
}

.container {
    display: grid;
    grid-template-columns: var(--aside) 1fr;
    gap: 1.5rem;
    padding: 1.5rem 2rem;
}

.sidebar, .content > section {
    background: var(--paper);
    border: 1px solid var(--rule);
    border-radius: 6px;
    padding: 1rem 1.25rem;
}

.sidebar {
    align-self: start;
}

.sidebar dl {
    display: grid;
    grid-template-columns: auto 1fr;
    gap: 0.25rem 1rem;
    margin: 0;
}

.sidebar dt {
    color: var(--faint);
}

.sidebar dd {
    margin: 0;
    font-weight: 600;
}

.content > section + section {
    margin-top: 1.5rem;
}

h2 {
    margin: 0 0 0.75rem;
    font-size: 1.1rem;
}

/* Tree drawn with connector lines */
.game-tree, .game-tree ul {
    list-style: none;
    margin: 0;
    padding: 0;
}

.game-tree ul {
    padding-left: 1.75rem;
}

.game-tree ul > li {
    position: relative;
}

.game-tree ul > li::before {
    content: "";
    position: absolute;
    left: -1rem;
    top: 0;
    bottom: 0;
    border-left: 1px solid var(--rule);
}

.game-tree ul > li:last-child::before {
    bottom: auto;
    height: 0.9rem;
}

.game-tree ul > li::after {
    content: "";
    position: absolute;
    left: -1rem;
    top: 0.9rem;
    width: 0.75rem;
    border-top: 1px solid var(--rule);
}

.node-label {
    display: inline-block;
    padding: 0.1rem 0;
}

.node-label .role {
    display: inline-block;
    min-width: 2.5rem;
    margin-right: 0.4rem;
    border-radius: 999px;
    font-size: 0.7rem;
    text-align: center;
    text-transform: uppercase;
}

.tree-node.max > .node-label .role {
    color: var(--max-fg);
    background: var(--max-bg);
}

.tree-node.min > .node-label .role {
    color: var(--min-fg);
    background: var(--min-bg);
}

.tree-node.pruned > .node-label {
    color: var(--cut);
    text-decoration: line-through;
}

.tree-node.unvisited > .node-label {
    color: var(--cut);
    opacity: 0.55;
}

.bounds {
    margin-left: 0.5rem;
    color: var(--faint);
    font: 0.8rem ui-monospace, monospace;
}

table {
    width: 100%;
    border-collapse: collapse;
    font-variant-numeric: tabular-nums;
}

th, td {
    padding: 0.3rem 0.6rem;
    border-bottom: 1px solid var(--rule);
    text-align: left;
}

tr.step-cutoff td, tr.step-prune td {
    color: var(--cut);
}

tr.step-leaf td {
    color: var(--faint);
}

code {
    font-family: ui-monospace, monospace;
}

@media (max-width: 760px) {
    .container {
        grid-template-columns: 1fr;
    }
}
"""
