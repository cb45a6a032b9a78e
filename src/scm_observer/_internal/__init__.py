"""Internal building blocks shared by the public scm_observer modules."""
